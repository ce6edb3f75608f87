"""
View state + controller for the restaurant table.

`ViewState` holds only inputs: the loaded records, the search term, the sort
config and the viewer location. Filtered and sorted collections are recomputed
from those inputs on every access, so they can never go stale.

`RestaurantTableView` owns one `ViewState` and turns events into state changes:
- load completion (exactly one fetch per view),
- location transitions from the `LocationProvider`,
- search edits and sort-header requests.
Listeners registered with `on_change` are called after each change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from rstable.core.errors import FetchFailure
from rstable.core.geo import GeoPoint
from rstable.domain.models import RestaurantRecord, SortConfig, SortKey
from rstable.view.filtering import SEARCH_MIN_CHARS, filter_records
from rstable.view.location import LocationProvider, LocationState
from rstable.view.render import TableRow, build_rows
from rstable.view.sorting import next_sort, record_distance, sort_records

logger = logging.getLogger(__name__)

Fetcher = Callable[[], list[RestaurantRecord]]
ChangeListener = Callable[["ViewState"], None]


@dataclass
class ViewState:
    all_records: list[RestaurantRecord] = field(default_factory=list)
    search_term: str = ""
    sort: SortConfig = field(default_factory=SortConfig)
    viewer_location: GeoPoint | None = None
    search_min_chars: int = SEARCH_MIN_CHARS

    @property
    def filtered_records(self) -> list[RestaurantRecord]:
        return filter_records(self.all_records, self.search_term, min_chars=self.search_min_chars)

    @property
    def sorted_records(self) -> list[RestaurantRecord]:
        return sort_records(self.filtered_records, self.sort, self.viewer_location)

    def distance_to(self, record: RestaurantRecord) -> float | None:
        return record_distance(record, self.viewer_location)


class RestaurantTableView:
    """Top-level view: the single owner (and writer) of a `ViewState`."""

    def __init__(
        self,
        *,
        fetcher: Fetcher,
        location: LocationProvider,
        search_min_chars: int = SEARCH_MIN_CHARS,
    ) -> None:
        self.state = ViewState(search_min_chars=search_min_chars, viewer_location=location.coordinates)
        self._fetcher = fetcher
        self._location = location
        self._loaded = False
        self._closed = False
        self._listeners: list[ChangeListener] = []
        self._unsubscribe = location.subscribe(self._on_location)

    @property
    def location_state(self) -> LocationState:
        return self._location.state

    def on_change(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def load(self) -> None:
        """Fetch the collection once; a failed fetch leaves the table empty."""
        if self._loaded:
            logger.debug("Restaurants already loaded; ignoring repeated load()")
            return
        self._loaded = True
        try:
            records = self._fetcher()
        except FetchFailure as e:
            logger.error("Error fetching restaurants: %s", e)
            records = []
        if self._closed:
            return
        self.state.all_records = list(records)
        self._changed()

    def set_search_term(self, term: str) -> None:
        self.state.search_term = term
        self._changed()

    def request_sort(self, key: SortKey) -> SortConfig:
        self.state.sort = next_sort(self.state.sort, key)
        self._changed()
        return self.state.sort

    def rows(self, *, timezone: str) -> list[TableRow]:
        return build_rows(
            self.state.sorted_records,
            viewer_location=self.state.viewer_location,
            location_state=self.location_state,
            timezone=timezone,
        )

    def close(self) -> None:
        """Detach from the location provider; results arriving afterwards are dropped."""
        self._closed = True
        self._unsubscribe()

    def _on_location(self, provider: LocationProvider) -> None:
        if self._closed:
            return
        self.state.viewer_location = provider.coordinates
        self._changed()

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)
