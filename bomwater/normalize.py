"""Reshape QueryServices JSON responses into ``ResultTable`` objects.

Two response shapes exist:

- Listing requests (stations, parameters, sites, timeseries metadata)
  return an array of arrays whose first row is the header::

      [["station_name", "station_no"], ["Cotter R. at Gingera", "410730"]]

  or the bare string ``"No matches."`` when nothing matched.

- ``getTimeseriesValues`` returns an array of envelopes, each with a
  comma-separated header and its rows::

      [{"ts_id": "1573010",
        "columns": "Timestamp,Value,Quality Code",
        "data": [["2020-01-01T00:00:00.000+10:00", 1.23, 140]]}]

  A bare envelope is accepted too, including one whose ``data`` nests
  the row array one level deeper (``"data": [[[...], ...]]``). An
  empty row array yields an empty ``Timestamp``/``Value``/
  ``Quality Code`` table.

All cells come out as text; see ``bomwater.convert`` for typed values.
"""

from __future__ import annotations

import json
import logging

from bomwater.errors import MalformedResponseError, NoMatchError
from bomwater.kinds import RequestKind
from bomwater.tables import ResultTable

logger = logging.getLogger(__name__)

NO_MATCHES = "No matches."

EMPTY_VALUE_COLUMNS = ("Timestamp", "Value", "Quality Code")

_BODY_PREVIEW = 200


def normalize(body: str, params: dict) -> ResultTable:
    """Parse *body* according to the request kind named in *params*.

    Args:
        body: Raw response text.
        params: The request parameters; ``params["request"]`` selects
            the parser.

    Returns:
        The response as a ``ResultTable``.

    Raises:
        UnsupportedRequestError: If the request kind is missing or unknown.
        NoMatchError: If a listing request matched nothing.
        MalformedResponseError: If the body is not the expected JSON shape.
    """
    kind = RequestKind.from_params(params)
    payload = _decode(body)
    if kind.is_listing:
        table = _listing_table(payload, params)
    else:
        table = _values_table(payload)
    logger.debug("%s -> %d rows x %d columns", kind.value, len(table), len(table.columns))
    return table


def _decode(body: str):
    try:
        return json.loads(body)
    except (TypeError, ValueError) as exc:
        raise MalformedResponseError(
            f"Response is not valid JSON ({exc}); body starts with: "
            f"{_preview(body)!r}"
        ) from exc


def _preview(body) -> str:
    text = body if isinstance(body, str) else repr(body)
    return text[:_BODY_PREVIEW]


def _text(cell) -> str:
    """Render one JSON cell as text."""
    if isinstance(cell, str):
        return cell
    if cell is None:
        return ""
    return json.dumps(cell)


def _listing_table(payload, params: dict) -> ResultTable:
    if payload == NO_MATCHES:
        criteria = {k: v for k, v in params.items() if k != "request"}
        raise NoMatchError(
            f"No parameter type and station number match found for {criteria}; "
            f"service replied {NO_MATCHES!r}"
        )
    if not isinstance(payload, list) or not payload:
        raise MalformedResponseError(
            f"Expected a header row followed by data rows, got: {_preview(json.dumps(payload))!r}"
        )
    if not all(isinstance(row, list) for row in payload):
        raise MalformedResponseError(
            f"Expected every row to be an array, got: {_preview(json.dumps(payload))!r}"
        )

    header, *data = payload
    return _build(header, data)


def _is_row_block(value) -> bool:
    return isinstance(value, list) and all(isinstance(r, list) for r in value)


def _values_table(payload) -> ResultTable:
    # The service wraps envelopes in an array, one per requested ts_id
    if isinstance(payload, list) and payload and isinstance(payload[0], dict):
        if len(payload) > 1:
            logger.warning(
                "Response holds %d timeseries; only the first is returned", len(payload)
            )
        payload = payload[0]
    if not isinstance(payload, dict) or "columns" not in payload or "data" not in payload:
        raise MalformedResponseError(
            "Expected an object with 'columns' and 'data', got: "
            f"{_preview(json.dumps(payload))!r}"
        )

    columns = str(payload["columns"]).split(",")
    data = payload["data"]
    if not isinstance(data, list):
        raise MalformedResponseError(f"'data' is not an array: {_preview(json.dumps(data))!r}")

    # Rows arrive either directly ([[...], ...]) or nested one level ([[[...], ...]])
    rows = data[0] if data and _is_row_block(data[0]) else data
    if not rows:
        return ResultTable.empty(EMPTY_VALUE_COLUMNS)
    if not _is_row_block(rows):
        raise MalformedResponseError(
            f"'data' does not hold an array of rows: {_preview(json.dumps(data))!r}"
        )
    return _build(columns, rows)


def _build(header, rows) -> ResultTable:
    try:
        return ResultTable(
            columns=tuple(_text(c) for c in header),
            rows=tuple(tuple(_text(c) for c in row) for row in rows),
        )
    except ValueError as exc:
        raise MalformedResponseError(f"Ragged response table: {exc}") from exc
