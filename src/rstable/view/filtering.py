"""
Search filter for the restaurant table.

A record matches when its name, address or comments contain the search term,
ignoring case. Short terms (fewer than `SEARCH_MIN_CHARS` characters) leave the
collection untouched so the table does not flicker on every keystroke.
"""

from __future__ import annotations

from typing import Sequence

from rstable.domain.models import RestaurantRecord

SEARCH_MIN_CHARS = 3


def matches(record: RestaurantRecord, lowered_term: str) -> bool:
    return (
        lowered_term in record.name.lower()
        or lowered_term in record.address.lower()
        or (record.comments is not None and lowered_term in record.comments.lower())
    )


def filter_records(
    records: Sequence[RestaurantRecord],
    search_term: str,
    *,
    min_chars: int = SEARCH_MIN_CHARS,
) -> list[RestaurantRecord]:
    """Return the records matching `search_term` (a copy of all records below the threshold)."""
    if not search_term or len(search_term) < min_chars:
        return list(records)
    lowered = search_term.lower()
    return [r for r in records if matches(r, lowered)]
