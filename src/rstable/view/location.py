"""
Viewer location provider.

The location starts `pending`, then settles exactly once to either `available`
(coordinates known) or `unavailable` (denied or failed). A settled provider never
changes again within the session, so a denial is not retried.

Listeners are called on the transition so distance-dependent views can recompute.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from rstable.core.errors import GeolocationError, GeolocationUnavailable
from rstable.core.geo import GeoPoint, is_known

logger = logging.getLogger(__name__)

Locator = Callable[[], GeoPoint]
Listener = Callable[["LocationProvider"], None]


class LocationState(str, Enum):
    PENDING = "pending"
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class LocationProvider:
    """One-shot holder for the viewer's coordinates."""

    def __init__(self) -> None:
        self._state = LocationState.PENDING
        self._coordinates: GeoPoint | None = None
        self._error: GeolocationError | None = None
        self._listeners: list[Listener] = []
        self._requested = False

    @property
    def state(self) -> LocationState:
        return self._state

    @property
    def coordinates(self) -> GeoPoint | None:
        """Known coordinates, or None while pending or once unavailable."""
        return self._coordinates

    @property
    def error(self) -> GeolocationError | None:
        return self._error

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener`; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def resolve(self, point: GeoPoint) -> bool:
        """Settle to `available`. Returns False if the provider had already settled."""
        if self._state is not LocationState.PENDING:
            logger.debug("Ignoring location %s; provider already %s", point, self._state.value)
            return False
        if not is_known(point):
            return self.fail(GeolocationUnavailable(f"Unusable coordinates: {point}"))
        self._coordinates = point
        self._state = LocationState.AVAILABLE
        self._notify()
        return True

    def fail(self, error: GeolocationError) -> bool:
        """Settle to `unavailable`. Returns False if the provider had already settled."""
        if self._state is not LocationState.PENDING:
            return False
        logger.warning("Viewer location unavailable: %s", error)
        self._error = error
        self._state = LocationState.UNAVAILABLE
        self._notify()
        return True

    def request(self, locator: Locator) -> None:
        """Ask `locator` for the position once; later calls are no-ops."""
        if self._requested:
            return
        self._requested = True
        try:
            point = locator()
        except GeolocationError as e:
            self.fail(e)
            return
        self.resolve(point)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)


def fixed_locator(lat: float | None, lng: float | None) -> Locator:
    """Locator for a position given up front (CLI flags or config)."""

    def locate() -> GeoPoint:
        if lat is None or lng is None:
            raise GeolocationUnavailable("No viewer location configured")
        return GeoPoint(lat=float(lat), lng=float(lng))

    return locate
