"""Typed views of timeseries-value tables.

The normalizer leaves every cell as text. These helpers turn a
``getTimeseriesValues`` table into records with real types:

- ``Timestamp`` -> ``datetime`` (timezone-aware when the service
  includes an offset, e.g. ``2020-01-01T00:00:00.000+10:00``)
- ``Value`` -> ``float``, ``None`` when blank or not numeric
- ``Quality Code`` -> ``int``, ``None`` when blank

Other columns are passed through as text.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from bomwater.tables import ResultTable


def parse_timestamp(text: str) -> Optional[datetime]:
    if not text:
        return None
    # Python < 3.11 rejects a trailing "Z"
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def parse_value(text: str) -> Optional[float]:
    try:
        return float(text)
    except (ValueError, TypeError):
        return None


def parse_quality_code(text: str) -> Optional[int]:
    if not text:
        return None
    return int(float(text))


_CONVERTERS = {
    "Timestamp": parse_timestamp,
    "Value": parse_value,
    "Quality Code": parse_quality_code,
}


def typed_records(table: ResultTable) -> List[Dict[str, Any]]:
    """Convert a timeseries-values table into typed dict records.

    Args:
        table: Result of ``get_timeseries_values``.

    Returns:
        One dict per row, keyed by column name.

    Raises:
        ValueError: If a timestamp or quality code cannot be parsed.
    """
    converters = [_CONVERTERS.get(name) for name in table.columns]
    records = []
    for row in table.rows:
        record = {}
        for name, convert, cell in zip(table.columns, converters, row):
            record[name] = convert(cell) if convert else cell
        records.append(record)
    return records
