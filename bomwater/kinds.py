"""Request kinds understood by the KISTERS QueryServices endpoint."""

from __future__ import annotations

from enum import Enum

from bomwater.errors import UnsupportedRequestError


class RequestKind(str, Enum):
    """Closed set of ``request`` values this client knows how to parse.

    Listing kinds answer with a header row followed by data rows;
    ``TIMESERIES_VALUES`` answers with a ``columns``/``data`` envelope.
    """

    STATION_LIST = "getStationList"
    PARAMETER_LIST = "getParameterList"
    PARAMETER_TYPE_LIST = "getParameterTypeList"
    SITE_LIST = "getSiteList"
    TIMESERIES_LIST = "getTimeseriesList"
    TIMESERIES_VALUES = "getTimeseriesValues"

    @property
    def is_listing(self) -> bool:
        return self is not RequestKind.TIMESERIES_VALUES

    @classmethod
    def parse(cls, value) -> "RequestKind":
        """Resolve a raw ``request`` value, rejecting unknown kinds.

        Raises:
            UnsupportedRequestError: If *value* is missing or unknown.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            known = ", ".join(k.value for k in cls)
            raise UnsupportedRequestError(
                f"Unsupported request kind {value!r}; expected one of: {known}"
            ) from None

    @classmethod
    def from_params(cls, params: dict) -> "RequestKind":
        """Resolve the kind named by the ``request`` key of *params*."""
        if "request" not in params:
            raise UnsupportedRequestError(
                "Request parameters have no 'request' key naming the request kind"
            )
        return cls.parse(params["request"])
