"""Error taxonomy shared by the viewer, the API and the offline jobs."""

from __future__ import annotations


class RsTableError(Exception):
    """Base class for all rsTable errors."""


class FetchFailure(RsTableError):
    """The retrieval endpoint was unreachable or answered with a non-success status."""


class GeolocationError(RsTableError):
    """The viewer location could not be obtained."""


class GeolocationDenied(GeolocationError):
    """The viewer refused to share a location."""


class GeolocationUnavailable(GeolocationError):
    """No location source is available (or it failed)."""


class SheetSyncError(RsTableError):
    """The spreadsheet source is not configured or could not be read."""


class GeocodingBlocked(RsTableError):
    """The geocoding service answered 403 (rate limit or block)."""
