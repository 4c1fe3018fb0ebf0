"""HTTP health probe for the managed application.

A single GET against the health endpoint; only the status code matters.
The probe never raises: an unreachable endpoint is reported as unknown.
"""

from __future__ import annotations

__all__ = ["HealthChecker"]

import logging

import httpx

from devrunner.constants import APP_NAME, HEALTH_CHECK_TIMEOUT_SECONDS
from devrunner.exceptions import HealthCheckUnavailable
from devrunner.models import HealthReport, HealthState

_logger = logging.getLogger(f"{APP_NAME}.health")


class HealthChecker:
    """Queries the application's health endpoint.

    Args:
        url: Full health endpoint URL.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport (tests pass httpx.MockTransport).
    """

    def __init__(
        self,
        url: str,
        timeout: float = HEALTH_CHECK_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._transport = transport

    def fetch_status_code(self) -> int:
        """GET the health endpoint and return the HTTP status code.

        Raises:
            HealthCheckUnavailable: If no HTTP response was received.
        """
        try:
            with httpx.Client(transport=self._transport, timeout=self.timeout) as client:
                response = client.get(self.url)
        except httpx.HTTPError as e:
            raise HealthCheckUnavailable(f"{type(e).__name__}: {e}") from e
        return response.status_code

    def check(self) -> HealthReport:
        """Probe the endpoint and classify the result.

        Returns:
            HealthReport: healthy for HTTP 200, unhealthy for any other status,
            unknown when the endpoint could not be reached.
        """
        try:
            status_code = self.fetch_status_code()
        except HealthCheckUnavailable as e:
            _logger.debug(
                {
                    "event": "health_check_unavailable",
                    "message": f"Health endpoint unreachable: {e}",
                    "url": self.url,
                }
            )
            return HealthReport(state=HealthState.UNKNOWN, url=self.url, detail=str(e))

        state = HealthState.HEALTHY if status_code == 200 else HealthState.UNHEALTHY
        return HealthReport(state=state, url=self.url, status_code=status_code)
