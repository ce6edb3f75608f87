"""
Sort stage for the restaurant table.

Each sortable column maps to a comparable value:
- text columns compare the raw strings (case-sensitive, missing comments as "");
- `visited` compares booleans (False first);
- `lastUpdated` compares timestamps (missing ones first);
- `distance` is derived from the viewer location; unknown distances compare as +inf.

Python's `sorted` is stable in both directions, so ties keep their input order.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Sequence

from rstable.core.geo import GeoPoint, distance_m
from rstable.domain.models import RestaurantRecord, SortConfig, SortDirection, SortKey

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def next_sort(current: SortConfig, key: SortKey) -> SortConfig:
    """Header click policy: same key while ascending flips to descending, anything else is ascending."""
    if current.key is key and current.direction is SortDirection.ASCENDING:
        return SortConfig(key=key, direction=SortDirection.DESCENDING)
    return SortConfig(key=key, direction=SortDirection.ASCENDING)


def record_distance(record: RestaurantRecord, viewer_location: GeoPoint | None) -> float | None:
    """Meters from the viewer to `record`, or None when either position is unknown."""
    return distance_m(viewer_location, record.point)


def sort_value(record: RestaurantRecord, key: SortKey, viewer_location: GeoPoint | None = None) -> Any:
    if key is SortKey.NAME:
        return record.name
    if key is SortKey.ADDRESS:
        return record.address
    if key is SortKey.COMMENTS:
        return record.comments or ""
    if key is SortKey.VISITED:
        return record.visited
    if key is SortKey.LAST_UPDATED:
        return record.last_updated or _EARLIEST
    if key is SortKey.DISTANCE:
        distance = record_distance(record, viewer_location)
        return math.inf if distance is None else distance
    raise ValueError(f"Unsortable key: {key.value}")


def sort_records(
    records: Sequence[RestaurantRecord],
    config: SortConfig,
    viewer_location: GeoPoint | None = None,
) -> list[RestaurantRecord]:
    """Return a new list ordered by `config`; the input sequence is never mutated."""
    if config.key is SortKey.NONE:
        return list(records)
    return sorted(
        records,
        key=lambda r: sort_value(r, config.key, viewer_location),
        reverse=config.direction is SortDirection.DESCENDING,
    )
