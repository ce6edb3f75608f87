"""
Spreadsheet sync.

Regenerates the restaurant data file from the first sheet of a Google Sheets
document, read through its CSV export (or from a local CSV file).

Column mapping is a single contract: headers are matched case-insensitively after
trimming whitespace, so `googleMapsUrl`, `GoogleMapsURL` and ` googlemapsurl `
all feed the same field. Unknown columns are ignored.
"""

from __future__ import annotations

import csv
import io
import logging
import math
import secrets
import string
from datetime import datetime
from pathlib import Path
from typing import Iterable

import httpx

from rstable.catalog.loader import write_restaurants
from rstable.config.settings import Settings
from rstable.core.errors import SheetSyncError
from rstable.core.http import get_text
from rstable.core.time import utc_now
from rstable.domain.models import Coordinates, RestaurantRecord

logger = logging.getLogger(__name__)

SHEET_COLUMNS = (
    "id",
    "visited",
    "name",
    "address",
    "googleMapsUrl",
    "placeId",
    "openingHours",
    "comments",
    "lat",
    "lng",
)

_ID_ALPHABET = string.digits + string.ascii_lowercase
_TRUE_VALUES = {"TRUE", "true"}


def random_id(length: int = 9) -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


def export_url(settings: Settings) -> str:
    sheet_id = settings.sheets.sheet_id
    if not sheet_id:
        raise SheetSyncError("Missing Google Sheet id (set GOOGLE_SHEET_ID or sheets.sheet_id).")
    return settings.sheets.export_url.format(sheet_id=sheet_id)


def fetch_sheet_csv(settings: Settings) -> str:
    """Download the first sheet as CSV text."""
    url = export_url(settings)
    params = {"format": "csv", "gid": settings.sheets.gid}
    logger.info("Downloading spreadsheet export %s (gid=%s)", url, settings.sheets.gid)
    try:
        return get_text(url, params=params, timeout_seconds=settings.app.http_timeout_seconds)
    except httpx.HTTPError as e:
        raise SheetSyncError(f"Could not download spreadsheet: {type(e).__name__}: {e}") from e


def read_rows(csv_text: str) -> list[dict[str, str]]:
    """Parse CSV text into rows keyed by normalized (trimmed, lower-cased) header."""
    reader = csv.DictReader(io.StringIO(csv_text.lstrip("\ufeff")))
    rows: list[dict[str, str]] = []
    for row in reader:
        normalized = {
            str(k).strip().lower(): (v or "")
            for k, v in row.items()
            if k is not None
        }
        if any(v.strip() for v in normalized.values()):
            rows.append(normalized)
    return rows


def _cell(row: dict[str, str], column: str) -> str | None:
    value = row.get(column.lower())
    if value is None:
        return None
    value = value.strip()
    return value or None


def _as_coordinate(value: str | None) -> float:
    if value is None:
        return 0.0
    try:
        x = float(value)
    except ValueError:
        return 0.0
    return x if math.isfinite(x) else 0.0


def _split_hours(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split("|")]


def row_to_record(row: dict[str, str], *, now: datetime) -> RestaurantRecord:
    """Map one normalized spreadsheet row onto a `RestaurantRecord`."""
    return RestaurantRecord(
        id=_cell(row, "id") or random_id(),
        visited=(_cell(row, "visited") or "") in _TRUE_VALUES,
        name=_cell(row, "name") or "",
        address=_cell(row, "address") or "",
        google_maps_url=_cell(row, "googleMapsUrl"),
        place_id=_cell(row, "placeId"),
        opening_hours=_split_hours(_cell(row, "openingHours")),
        comments=_cell(row, "comments"),
        coordinates=Coordinates(
            lat=_as_coordinate(_cell(row, "lat")),
            lng=_as_coordinate(_cell(row, "lng")),
        ),
        last_updated=now,
    )


def rows_to_records(rows: Iterable[dict[str, str]], *, now: datetime | None = None) -> list[RestaurantRecord]:
    stamp = now or utc_now()
    return [row_to_record(row, now=stamp) for row in rows]


def sync_sheet(
    *,
    settings: Settings,
    out_path: str | Path,
    csv_path: str | Path | None = None,
    now: datetime | None = None,
) -> list[RestaurantRecord]:
    """Replace the data file with the spreadsheet contents.

    Raises:
        SheetSyncError: If no source is configured or it cannot be read.
    """
    if csv_path is not None:
        try:
            csv_text = Path(csv_path).read_text(encoding="utf-8-sig")
        except OSError as e:
            raise SheetSyncError(f"Could not read {csv_path}: {e}") from e
    else:
        csv_text = fetch_sheet_csv(settings)

    rows = read_rows(csv_text)
    missing = [c for c in ("name", "address") if rows and c not in rows[0]]
    if missing:
        logger.warning("Spreadsheet has no %s column(s); those fields will be empty.", ", ".join(missing))

    records = rows_to_records(rows, now=now)
    written = write_restaurants(out_path, records)
    logger.info("Successfully synced %s restaurants into %s", len(records), written)
    return records
