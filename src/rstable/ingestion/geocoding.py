"""
Address geocoding (OpenStreetMap Nominatim).

Nominatim's usage policy asks for a descriptive User-Agent and at most one
request per second; every lookup waits for its turn on a `RequestSpacer`.
A 403 means we are rate limited or blocked and surfaces as `GeocodingBlocked`.
"""

from __future__ import annotations

import logging

import httpx

from rstable.config.settings import GeocodingSettings
from rstable.core.errors import GeocodingBlocked
from rstable.core.geo import GeoPoint
from rstable.core.http import get_json
from rstable.core.rate_limit import RequestSpacer

logger = logging.getLogger(__name__)


class NominatimGeocoder:
    """Forward geocoder: free-text address -> first matching point."""

    def __init__(
        self,
        settings: GeocodingSettings,
        *,
        timeout_seconds: float = 15,
        spacer: RequestSpacer | None = None,
    ):
        self._settings = settings
        self._timeout_seconds = timeout_seconds
        self._spacer = spacer or RequestSpacer.per_minute(settings.max_per_minute)

    def _headers(self) -> dict[str, str]:
        return {"User-Agent": self._settings.user_agent, "Referer": self._settings.referer}

    def geocode(self, address: str) -> GeoPoint | None:
        """Return the best match for `address`, or None when nothing matched.

        Raises:
            GeocodingBlocked: On HTTP 403.
            httpx.HTTPError: On other transport/status errors.
            ValueError: When the response body is not JSON.
        """
        if not address or not address.strip():
            return None

        self._spacer.wait()
        params = {"format": "json", "q": address, "limit": 1}
        try:
            payload = get_json(
                f"{self._settings.base_url.rstrip('/')}/search",
                params=params,
                headers=self._headers(),
                timeout_seconds=self._timeout_seconds,
            )
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 403:
                raise GeocodingBlocked(f"Nominatim refused the request for {address!r} (403)") from e
            raise

        if not isinstance(payload, list) or not payload:
            return None
        first = payload[0]
        try:
            return GeoPoint(lat=float(first["lat"]), lng=float(first["lon"]))
        except (KeyError, TypeError, ValueError):
            logger.warning("Unexpected Nominatim result for %r: %s", address, first)
            return None
