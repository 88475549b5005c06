"""Client for the Bureau of Meteorology Water Data Online service.

Queries the BoM KISTERS QueryServices endpoint and returns the JSON
responses as ``ResultTable`` objects of text cells.

Usage::

    import bomwater

    stations = bomwater.get_station_list(parameter_type="Rainfall")
    print(stations.to_markdown())
"""

__version__ = "0.1.0"

from bomwater.client import (  # noqa: E402
    BomWaterClient,
    get_station_list,
    get_timeseries_id,
    get_timeseries_values,
    make_request,
)
from bomwater.errors import (  # noqa: E402
    BomWaterError,
    MalformedResponseError,
    NoMatchError,
    ResponseWarning,
    TransportError,
    UnsupportedRequestError,
)
from bomwater.kinds import RequestKind  # noqa: E402
from bomwater.tables import ResultTable  # noqa: E402

__all__ = [
    "BomWaterClient",
    "BomWaterError",
    "MalformedResponseError",
    "NoMatchError",
    "RequestKind",
    "ResponseWarning",
    "ResultTable",
    "TransportError",
    "UnsupportedRequestError",
    "get_station_list",
    "get_timeseries_id",
    "get_timeseries_values",
    "make_request",
]
