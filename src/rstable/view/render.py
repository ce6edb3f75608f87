"""Plain-text rendering of the restaurant table."""

from __future__ import annotations

from dataclasses import astuple, dataclass
from typing import Sequence

from rstable.core.geo import GeoPoint
from rstable.core.time import format_local
from rstable.domain.models import RestaurantRecord, SortConfig, SortKey
from rstable.view.location import LocationState
from rstable.view.sorting import record_distance

NOT_AVAILABLE = "N/A"
CALCULATING = "Calculating..."

# (header, sort key) in display order; None marks a column that cannot be sorted.
COLUMNS: list[tuple[str, SortKey | None]] = [
    ("Visitado", SortKey.VISITED),
    ("Nombre", SortKey.NAME),
    ("Dirección", SortKey.ADDRESS),
    ("Horarios", None),
    ("Comentarios", SortKey.COMMENTS),
    ("Maps", None),
    ("Distancia", SortKey.DISTANCE),
    ("Última Act.", SortKey.LAST_UPDATED),
]


@dataclass(frozen=True)
class TableRow:
    visited: str
    name: str
    address: str
    opening_hours: str
    comments: str
    maps_url: str
    distance: str
    last_updated: str


def distance_label(distance: float | None, location_state: LocationState) -> str:
    if distance is not None:
        return f"{round(distance)} m"
    if location_state is LocationState.PENDING:
        return CALCULATING
    return NOT_AVAILABLE


def build_row(
    record: RestaurantRecord,
    *,
    viewer_location: GeoPoint | None,
    location_state: LocationState,
    timezone: str,
) -> TableRow:
    return TableRow(
        visited="✓" if record.visited else "✗",
        name=record.name,
        address=record.address,
        opening_hours="; ".join(record.opening_hours) if record.opening_hours is not None else NOT_AVAILABLE,
        comments=record.comments or "",
        maps_url=record.google_maps_url or "",
        distance=distance_label(record_distance(record, viewer_location), location_state),
        last_updated=format_local(record.last_updated, timezone) if record.last_updated else NOT_AVAILABLE,
    )


def build_rows(
    records: Sequence[RestaurantRecord],
    *,
    viewer_location: GeoPoint | None,
    location_state: LocationState,
    timezone: str,
) -> list[TableRow]:
    return [
        build_row(r, viewer_location=viewer_location, location_state=location_state, timezone=timezone)
        for r in records
    ]


def render_table(rows: Sequence[TableRow], sort: SortConfig) -> str:
    headers = [f"{title} {sort.indicator_for(key)}".rstrip() if key else title for title, key in COLUMNS]
    cells = [list(astuple(row)) for row in rows]
    widths = [max([len(h), *(len(c[i]) for c in cells)]) for i, h in enumerate(headers)]

    def line(values: Sequence[str]) -> str:
        return "  ".join(v.ljust(w) for v, w in zip(values, widths)).rstrip()

    out = [line(headers), line(["-" * w for w in widths])]
    out.extend(line(c) for c in cells)
    return "\n".join(out)
