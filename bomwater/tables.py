"""Tabular results of a Water Data request.

``ResultTable`` holds ordered column names and rows of text cells, with
every row exactly as wide as the header. ``md_table()`` renders headers
and rows as a Markdown table and backs ``ResultTable.to_markdown()``.

Example::

    from bomwater.tables import ResultTable

    table = ResultTable(
        columns=("station_name", "station_no"),
        rows=(("Cotter R. at Gingera", "410730"),),
    )
    print(table.to_markdown())

    # | station_name | station_no |
    # | --- | --- |
    # | Cotter R. at Gingera | 410730 |
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import Sequence


def _md_cell(value) -> str:
    return str(value).replace("|", "\\|").replace("\n", " ")


def md_table(
    headers: Sequence[str],
    rows: Sequence[Sequence],
    alignments: Sequence[str] | None = None,
) -> str:
    """Build a Markdown table from headers and rows.

    Args:
        headers: Column header strings.
        rows: Rows of cell values. Non-string values are converted via
            ``str()``; pipes are escaped and newlines flattened.
        alignments: Optional alignment codes, one per column: ``'l'``
            (default), ``'r'`` or ``'c'``.

    Returns:
        The Markdown table. With no rows only the header and separator
        lines are produced, so an empty result still shows its columns.
    """
    if alignments is None:
        alignments = ["l"] * len(headers)

    markers = {"l": "---", "r": "---:", "c": ":---:"}
    lines = [
        "| " + " | ".join(_md_cell(h) for h in headers) + " |",
        "| " + " | ".join(markers.get(a, "---") for a in alignments) + " |",
    ]
    for row in rows:
        lines.append("| " + " | ".join(_md_cell(c) for c in row) + " |")
    return "\n".join(lines)


@dataclass(frozen=True)
class ResultTable:
    """An ordered table of text cells.

    Args:
        columns: Column names, in response order.
        rows: Data rows, in response order. Each row must have exactly
            ``len(columns)`` cells.

    Raises:
        ValueError: If any row's width differs from the header's.
    """

    columns: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "columns", tuple(self.columns))
        object.__setattr__(self, "rows", tuple(tuple(r) for r in self.rows))
        width = len(self.columns)
        for i, row in enumerate(self.rows):
            if len(row) != width:
                raise ValueError(
                    f"Row {i} has {len(row)} cells but the table has "
                    f"{width} columns {list(self.columns)}"
                )

    @classmethod
    def empty(cls, columns: Sequence[str]) -> "ResultTable":
        """Return a zero-row table with the given columns."""
        return cls(columns=tuple(columns))

    def __len__(self) -> int:
        return len(self.rows)

    def column(self, name: str) -> list[str]:
        """Return the cells of column *name*, top to bottom.

        Raises:
            KeyError: If the table has no such column.
        """
        try:
            idx = self.columns.index(name)
        except ValueError:
            raise KeyError(name) from None
        return [row[idx] for row in self.rows]

    def to_records(self) -> list[dict[str, str]]:
        """Return the rows as dicts keyed by column name."""
        return [dict(zip(self.columns, row)) for row in self.rows]

    def to_markdown(self, alignments: Sequence[str] | None = None) -> str:
        return md_table(self.columns, self.rows, alignments)

    def to_csv(self) -> str:
        """Render the table as CSV text with a header line."""
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(self.columns)
        writer.writerows(self.rows)
        return buf.getvalue()
