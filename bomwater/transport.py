"""Single-shot HTTP transport for the BoM Water Data KISTERS service.

Provides ``WaterDataTransport``, which merges the fixed QueryServices
parameters with a caller's request parameters, performs exactly one GET
and hands back the raw body text. There is no retry, no rate limiting
and no caching: one request, one response.

Failures are reported, not hidden. By default a transport failure is
logged and whatever body is available (the error page, or ``""`` when
no response arrived) is returned so the caller's parse step fails with
the transport context attached. Pass ``strict=True`` to raise
``TransportError`` at the point of failure instead.

Usage::

    from bomwater.transport import WaterDataTransport

    with WaterDataTransport(timeout=30) as transport:
        body = transport.perform_request({
            "request": "getStationList",
            "parameterType_name": "Rainfall",
        })
"""

from __future__ import annotations

import logging
import warnings
from enum import Enum

import httpx

from bomwater import __version__
from bomwater.errors import ResponseWarning, TransportError

logger = logging.getLogger(__name__)

BOM_URL = "http://www.bom.gov.au/waterdata/services"

FIXED_PARAMS = {
    "service": "kisters",
    "type": "QueryServices",
    "format": "json",
}


def build_query(params: dict) -> dict[str, str]:
    """Merge the fixed service parameters with caller parameters.

    Request kinds use disjoint keys, so caller keys simply follow the
    fixed ones. Values are converted to text.
    """
    query = dict(FIXED_PARAMS)
    for key, value in params.items():
        if isinstance(value, Enum):
            value = value.value
        query[key] = str(value)
    return query


class WaterDataTransport:
    """HTTP transport performing one best-effort GET per request.

    Args:
        base_url: Service endpoint (default: the public BoM endpoint).
        timeout: Request timeout in seconds (default 60). A timeout is
            treated like any other transport failure.
        user_agent: User-Agent header string.
        headers: Additional HTTP headers to include in all requests.
        strict: If True, raise ``TransportError`` on transport failures
            instead of logging them and returning the available body.
        transport: Optional ``httpx.BaseTransport`` for testing
            (e.g., ``httpx.MockTransport``).
    """

    def __init__(
        self,
        *,
        base_url: str = BOM_URL,
        timeout: float = 60.0,
        user_agent: str = f"bomwater/{__version__}",
        headers: dict[str, str] | None = None,
        strict: bool = False,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.user_agent = user_agent
        self.strict = strict

        self.last_error: TransportError | None = None
        self._request_count = 0
        self._failure_count = 0

        req_headers = {"User-Agent": self.user_agent}
        if headers:
            req_headers.update(headers)

        client_kwargs = {
            "timeout": timeout,
            "headers": req_headers,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport

        self._http = httpx.Client(**client_kwargs)

    # ── Public API ────────────────────────────────────────────────────────

    def perform_request(self, params: dict) -> str:
        """Issue one GET for *params* and return the body as text.

        Args:
            params: Request parameters. Must include ``request``; the
                other keys are passed through verbatim.

        Returns:
            The response body. After a reported (non-strict) transport
            failure this is the error body, or ``""`` if nothing arrived.

        Raises:
            TransportError: On transport failure when ``strict`` is set.
        """
        query = build_query(params)
        self.last_error = None
        self._request_count += 1
        logger.debug("GET %s request=%s", self.base_url, query.get("request"))

        try:
            response = self._http.get(self.base_url, params=query)
        except httpx.HTTPError as exc:
            self._report_failure(TransportError(
                f"Request for water data failed. Check your request and make sure "
                f"{self.base_url} is online. Error message: {exc}",
                url=self.base_url,
            ), exc)
            return ""

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._report_failure(TransportError(
                f"Request for water data failed. Check your request and make sure "
                f"{self.base_url} is online. Error message: {exc}",
                url=str(response.url),
                status_code=response.status_code,
            ), exc)
            return response.text

        service_warning = response.headers.get("warning")
        if service_warning:
            message = (
                "Request for water data raised a warning. "
                f"Warning message: {service_warning}"
            )
            logger.warning(message)
            warnings.warn(message, ResponseWarning, stacklevel=2)

        return response.text

    @property
    def stats(self) -> dict:
        """Return request statistics.

        Returns:
            Dict with keys ``requests`` (GETs attempted) and
            ``failures`` (transport failures reported).
        """
        return {
            "requests": self._request_count,
            "failures": self._failure_count,
        }

    def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._http:
            self._http.close()
            self._http = None

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    # ── Internal helpers ──────────────────────────────────────────────────

    def _report_failure(self, error: TransportError, cause: Exception) -> None:
        self.last_error = error
        self._failure_count += 1
        if self.strict:
            raise error from cause
        logger.warning("%s", error)
