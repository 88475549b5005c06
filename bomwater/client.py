"""BoM Water Data Online client.

Provides ``BomWaterClient`` with one method per supported query plus
``make_request`` for arbitrary parameter mappings, and module-level
functions of the same names that open a client for a single call.

API docs: http://www.bom.gov.au/waterdata/services

Example:
    >>> from bomwater.client import BomWaterClient
    >>> with BomWaterClient() as client:
    ...     ts = client.get_timeseries_id(
    ...         "Water Course Discharge", "410730", "DMQaQc.Merged.DailyMean.24HR"
    ...     )
    ...     values = client.get_timeseries_values(
    ...         ts.column("ts_id")[0], "2020-01-01", "2020-01-31",
    ...         ["Timestamp", "Value", "Quality Code"],
    ...     )
"""

from __future__ import annotations

import datetime
from typing import Iterable

from bomwater.errors import MalformedResponseError
from bomwater.kinds import RequestKind
from bomwater.normalize import normalize
from bomwater.tables import ResultTable
from bomwater.transport import WaterDataTransport

DEFAULT_PARAMETER_TYPE = "Water Course Discharge"

DEFAULT_STATION_FIELDS = (
    "station_name",
    "station_no",
    "station_id",
    "station_latitude",
    "station_longitude",
)


def _join(values: str | Iterable[str]) -> str:
    """Comma-join an iterable of values, keeping a lone string whole."""
    if isinstance(values, str):
        return values
    return ",".join(str(v) for v in values)


def _date_text(value: str | datetime.date) -> str:
    if isinstance(value, datetime.datetime):
        value = value.date()
    if isinstance(value, datetime.date):
        return value.isoformat()
    return value


# ── Query builders ───────────────────────────────────────────────────────


def station_list_params(
    parameter_type: str | None = None,
    station_number: str | Iterable[str] | None = None,
    return_fields: Iterable[str] | None = None,
) -> dict[str, str]:
    """Parameters for a ``getStationList`` request.

    Args:
        parameter_type: Parameter of interest (e.g. ``"Rainfall"``).
            Defaults to ``"Water Course Discharge"``.
        station_number: Optional AWRC station number, or several of them;
            several are sent as one comma-separated ``station_no``.
        return_fields: Station details to return. Defaults to name,
            number, ID, latitude and longitude.
    """
    params = {
        "request": RequestKind.STATION_LIST.value,
        "parameterType_name": parameter_type or DEFAULT_PARAMETER_TYPE,
    }
    if station_number is not None:
        params["station_no"] = _join(station_number)
    params["returnfields"] = _join(return_fields if return_fields is not None else DEFAULT_STATION_FIELDS)
    return params


def timeseries_id_params(parameter_type: str, station_number: str, ts_name: str) -> dict[str, str]:
    """Parameters for a ``getTimeseriesList`` request."""
    return {
        "request": RequestKind.TIMESERIES_LIST.value,
        "parametertype_name": parameter_type,
        "ts_name": ts_name,
        "station_no": station_number,
    }


def timeseries_values_params(
    ts_id: str,
    start_date: str | datetime.date,
    end_date: str | datetime.date,
    return_fields: Iterable[str],
) -> dict[str, str]:
    """Parameters for a ``getTimeseriesValues`` request.

    Dates are ``YYYY-MM-DD`` text; ``date``/``datetime`` objects are
    formatted to that form.
    """
    return {
        "request": RequestKind.TIMESERIES_VALUES.value,
        "ts_id": str(ts_id),
        "from": _date_text(start_date),
        "to": _date_text(end_date),
        "returnfields": _join(return_fields),
    }


# ── Client ───────────────────────────────────────────────────────────────


class BomWaterClient(WaterDataTransport):
    """Client for the BoM Water Data KISTERS QueryServices endpoint.

    Each query performs one GET and returns a ``ResultTable`` of text
    cells. Accepts the same keyword arguments as ``WaterDataTransport``
    (``timeout``, ``strict``, ``transport``, ...).
    """

    def make_request(self, params: dict) -> ResultTable:
        """Run any QueryServices request and normalize its response.

        The request kind is validated before anything is sent.

        Raises:
            UnsupportedRequestError: Unknown or missing ``request``.
            NoMatchError: A listing request matched nothing.
            MalformedResponseError: The body could not be parsed. When a
                transport failure was reported for this request, its
                message is included and it is chained as the cause.
            TransportError: Transport failure in strict mode.
        """
        params = dict(params)
        params["request"] = RequestKind.from_params(params).value
        body = self.perform_request(params)
        try:
            return normalize(body, params)
        except MalformedResponseError as exc:
            if self.last_error is None:
                raise
            raise MalformedResponseError(
                f"{exc} (after transport failure: {self.last_error})"
            ) from self.last_error

    def get_station_list(
        self,
        parameter_type: str | None = None,
        station_number: str | Iterable[str] | None = None,
        return_fields: Iterable[str] | None = None,
    ) -> ResultTable:
        """Retrieve water observation stations.

        Query by *parameter_type* to list every station on record, or
        pass *station_number* (one or several) for just those stations.

        Returns:
            With default return fields, columns ``station_name``,
            ``station_no``, ``station_id``, ``station_latitude``,
            ``station_longitude``.
        """
        return self.make_request(station_list_params(parameter_type, station_number, return_fields))

    def get_timeseries_id(self, parameter_type: str, station_number: str, ts_name: str) -> ResultTable:
        """Retrieve the timeseries ID for a parameter, station and timeseries name.

        Args:
            parameter_type: Parameter of interest (e.g. Water Course Discharge).
            station_number: AWRC station number.
            ts_name: BoM timeseries name (e.g. DMQaQc.Merged.DailyMean.24HR).

        Returns:
            Columns such as ``station_name``, ``station_no``, ``station_id``,
            ``ts_id``, ``ts_name``, ``parametertype_id``,
            ``parametertype_name``.
        """
        return self.make_request(timeseries_id_params(parameter_type, station_number, ts_name))

    def get_timeseries_values(
        self,
        ts_id: str,
        start_date: str | datetime.date,
        end_date: str | datetime.date,
        return_fields: Iterable[str],
    ) -> ResultTable:
        """Retrieve timeseries values between two dates.

        Returns:
            One column per requested return field, cells as text. A
            zero-row table with ``Timestamp``, ``Value`` and
            ``Quality Code`` columns when there is no data.
        """
        return self.make_request(timeseries_values_params(ts_id, start_date, end_date, return_fields))


# ── One-shot helpers ─────────────────────────────────────────────────────


def make_request(params: dict, **client_kwargs) -> ResultTable:
    with BomWaterClient(**client_kwargs) as client:
        return client.make_request(params)


def get_station_list(
    parameter_type: str | None = None,
    station_number: str | Iterable[str] | None = None,
    return_fields: Iterable[str] | None = None,
    **client_kwargs,
) -> ResultTable:
    with BomWaterClient(**client_kwargs) as client:
        return client.get_station_list(parameter_type, station_number, return_fields)


def get_timeseries_id(parameter_type: str, station_number: str, ts_name: str, **client_kwargs) -> ResultTable:
    with BomWaterClient(**client_kwargs) as client:
        return client.get_timeseries_id(parameter_type, station_number, ts_name)


def get_timeseries_values(
    ts_id: str,
    start_date: str | datetime.date,
    end_date: str | datetime.date,
    return_fields: Iterable[str],
    **client_kwargs,
) -> ResultTable:
    with BomWaterClient(**client_kwargs) as client:
        return client.get_timeseries_values(ts_id, start_date, end_date, return_fields)
