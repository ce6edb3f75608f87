"""
Domain models (Pydantic).

These types are the contract between layers:
- the JSON data file and the `/api/restaurants` payload (`RestaurantRecord`)
- the viewer's sort controls (`SortKey`, `SortDirection`, `SortConfig`)

JSON keys stay camelCase on the wire (`googleMapsUrl`, `lastUpdated`, ...);
Python code uses snake_case attributes. Both forms are accepted on input.
"""

from __future__ import annotations

import math
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)

from rstable.core.geo import GeoPoint
from rstable.core.time import ensure_utc


class Coordinates(BaseModel):
    """A record's position in decimal degrees; 0 means "not geocoded yet"."""

    model_config = ConfigDict(frozen=True)

    lat: float = 0
    lng: float = 0

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> float:
        # null, "" or garbage collapse to the "not geocoded" sentinel.
        try:
            x = float(value)
        except (TypeError, ValueError):
            return 0.0
        return x if math.isfinite(x) else 0.0

    def to_point(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lng=self.lng)


class RestaurantRecord(BaseModel):
    """One row of the restaurant table.

    Parsing is lenient so a malformed entry still renders: missing text fields
    become empty strings, unusable coordinates become 0 (an unknown distance) and
    any other field that fails to parse falls back to its default.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    id: str = ""
    name: str = ""
    address: str = ""
    visited: bool = False
    comments: str | None = None
    coordinates: Coordinates | None = None
    google_maps_url: str | None = Field(default=None, alias="googleMapsUrl")
    place_id: str | None = Field(default=None, alias="placeId")
    opening_hours: list[str] | None = Field(default=None, alias="openingHours")
    last_updated: datetime | None = Field(default=None, alias="lastUpdated")

    @field_validator("id", "name", "address", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("last_updated", mode="wrap")
    @classmethod
    def _aware_timestamp(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> datetime | None:
        try:
            parsed = handler(value)
        except ValidationError:
            return None
        return ensure_utc(parsed) if parsed is not None else None

    @field_validator("visited", mode="wrap")
    @classmethod
    def _lenient_flag(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> bool:
        try:
            return handler(value)
        except ValidationError:
            return False

    @field_validator("comments", "google_maps_url", "place_id", "opening_hours", "coordinates", mode="wrap")
    @classmethod
    def _lenient_optional(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return None

    @property
    def point(self) -> GeoPoint | None:
        return self.coordinates.to_point() if self.coordinates is not None else None

    def to_json(self) -> dict[str, Any]:
        """Serialize with the camelCase keys used by the data file and the API."""
        return self.model_dump(mode="json", by_alias=True)


class SortKey(str, Enum):
    NONE = "none"
    NAME = "name"
    ADDRESS = "address"
    COMMENTS = "comments"
    DISTANCE = "distance"
    VISITED = "visited"
    LAST_UPDATED = "lastUpdated"


class SortDirection(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class SortConfig(BaseModel):
    """The active sort column and direction (no column means input order)."""

    model_config = ConfigDict(frozen=True)

    key: SortKey = SortKey.NONE
    direction: SortDirection = SortDirection.ASCENDING

    def indicator_for(self, key: SortKey) -> str:
        """Header arrow for `key`: up when ascending, down when descending, blank otherwise."""
        if key is SortKey.NONE or self.key is not key:
            return ""
        return "▲" if self.direction is SortDirection.ASCENDING else "▼"
