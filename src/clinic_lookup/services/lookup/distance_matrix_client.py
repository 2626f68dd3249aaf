"""HTTP client for the Google Distance Matrix API."""

from __future__ import annotations

import logging
from typing import Sequence

import httpx

from ...config import MAX_DESTINATIONS_PER_REQUEST, settings

logger = logging.getLogger(__name__)


class DistanceMatrixError(RuntimeError):
    """Raised when the provider answers with a non-OK top-level status."""

    def __init__(self, status: str, message: str | None = None) -> None:
        self.status = status
        detail = f"{status}: {message}" if message else status
        super().__init__(f"Distance matrix request failed with {detail}")


class DistanceMatrixClient:
    """Issues one distance matrix request per call. There are no retries."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        units: str | None = None,
        mode: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.require_api_key()
        self.base_url = base_url or settings.distance_matrix_url
        self.units = units or settings.units
        self.mode = mode or settings.travel_mode
        self.timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self.transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            transport=self.transport,
        )

    def matrix(self, origin: str, destinations: Sequence[str]) -> dict:
        """Request driving distances from ``origin`` to each destination address.

        Returns the decoded JSON payload. Raises ``httpx.HTTPError`` on transport
        or HTTP status errors, ``ValueError`` when the body is not JSON, and
        ``DistanceMatrixError`` when the provider reports a request-level error.
        """
        if not origin:
            raise ValueError("An origin is required for a distance matrix request.")
        if not destinations:
            raise ValueError("At least one destination is required for a distance matrix request.")
        if len(destinations) > MAX_DESTINATIONS_PER_REQUEST:
            raise ValueError(
                f"Too many destinations ({len(destinations)}); "
                f"the provider accepts at most {MAX_DESTINATIONS_PER_REQUEST} per request."
            )

        params = {
            "origins": origin,
            "destinations": "|".join(destinations),
            "mode": self.mode,
            "units": self.units,
            "key": self.api_key,
        }

        client = self._get_client()
        try:
            response = client.get(self.base_url, params=params)
            try:
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                # The request URL carries the API key; keep it out of the message.
                raise httpx.HTTPStatusError(
                    f"Distance matrix request returned HTTP {response.status_code} {response.reason_phrase}",
                    request=exc.request,
                    response=exc.response,
                ) from None
            data = response.json()
        finally:
            client.close()

        if not isinstance(data, dict):
            raise ValueError("Distance matrix response is not a JSON object.")
        status = data.get("status")
        if status != "OK":
            raise DistanceMatrixError(str(status), data.get("error_message"))
        return data
