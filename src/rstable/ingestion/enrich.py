"""
Location enrichment for the restaurant data file.

For each record with an address:
1. fill a missing `googleMapsUrl` with a Maps search link for the address;
2. geocode missing coordinates (either component 0) through Nominatim.

A 403 from Nominatim skips that record for the rest of the run; other lookup
errors (transport failures, unreadable responses) are logged and the record keeps
its current coordinates. The data file is rewritten only when at least one record
changed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from rstable.catalog.loader import describe_validation_error, read_raw, write_restaurants
from rstable.config.settings import Settings
from rstable.core.errors import GeocodingBlocked
from rstable.domain.models import Coordinates, RestaurantRecord
from rstable.ingestion.geocoding import NominatimGeocoder

logger = logging.getLogger(__name__)

# Characters JavaScript's encodeURIComponent leaves as-is; keeps links identical to the web client's.
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass
class EnrichReport:
    processed: int = 0
    updated: int = 0
    maps_urls_added: int = 0
    geocoded: int = 0
    not_found: list[str] = field(default_factory=list)
    blocked: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    written: bool = False


def maps_search_url(address: str, template: str) -> str:
    return template.format(query=quote(address, safe=_URI_COMPONENT_SAFE))


def needs_coordinates(record: RestaurantRecord) -> bool:
    coords = record.coordinates
    return coords is None or coords.lat == 0 or coords.lng == 0


def enrich_record(
    record: RestaurantRecord,
    *,
    geocoder: NominatimGeocoder,
    maps_url_template: str,
    report: EnrichReport,
    label: str,
) -> RestaurantRecord:
    """Return `record` with maps URL / coordinates filled where possible."""
    if not record.address:
        return record

    updates: dict[str, Any] = {}
    if not record.google_maps_url:
        updates["google_maps_url"] = maps_search_url(record.address, maps_url_template)
        report.maps_urls_added += 1
        logger.info("%s Added Maps URL for: %s", label, record.name)

    if needs_coordinates(record):
        logger.info("%s Fetching coordinates for: %s (%s)", label, record.name, record.address)
        try:
            point = geocoder.geocode(record.address)
        except GeocodingBlocked as e:
            logger.warning("%s %s; skipping coordinates.", label, e)
            report.blocked.append(record.id)
            point = None
        except (httpx.HTTPError, ValueError) as e:
            # ValueError covers a non-JSON body (e.g. an HTML error page).
            logger.error("%s Error geocoding address %r: %s", label, record.address, e)
            report.failed.append(record.id)
            point = None
        else:
            if point is None:
                logger.info("%s Could not find coordinates.", label)
                report.not_found.append(record.id)

        if point is not None:
            updates["coordinates"] = Coordinates(lat=point.lat, lng=point.lng)
            report.geocoded += 1
            logger.info("%s Found: %s, %s", label, point.lat, point.lng)

    return record.model_copy(update=updates) if updates else record


def _patched_item(item: dict[str, Any], before: RestaurantRecord, after: RestaurantRecord) -> dict[str, Any]:
    """Copy of the raw entry with only the enriched keys touched."""
    patched = dict(item)
    if after.google_maps_url != before.google_maps_url:
        patched.pop("google_maps_url", None)
        patched["googleMapsUrl"] = after.google_maps_url
    if after.coordinates is not None and after.coordinates != before.coordinates:
        raw_coords = item.get("coordinates")
        base = dict(raw_coords) if isinstance(raw_coords, dict) else {}
        patched["coordinates"] = {**base, **after.coordinates.model_dump()}
    return patched


def update_locations(
    *,
    settings: Settings,
    path: str | Path,
    geocoder: NominatimGeocoder | None = None,
) -> EnrichReport:
    """Enrich the data file at `path` in place.

    Entries are written back as read, apart from the `googleMapsUrl` and
    `coordinates` keys of records that were actually enriched.
    """
    geocoder = geocoder or NominatimGeocoder(
        settings.geocoding, timeout_seconds=settings.app.http_timeout_seconds
    )
    items = read_raw(path)
    total = len(items)
    report = EnrichReport()
    logger.info("Processing %s restaurants...", total)

    out: list[Any] = []
    for i, item in enumerate(items, start=1):
        label = f"[{i}/{total}]"
        report.processed += 1
        try:
            record = RestaurantRecord.model_validate(item)
        except ValidationError as e:
            logger.warning("%s Leaving unparsable entry as-is: %s", label, describe_validation_error(e))
            out.append(item)
            continue

        enriched = enrich_record(
            record,
            geocoder=geocoder,
            maps_url_template=settings.geocoding.maps_search_url,
            report=report,
            label=label,
        )
        if enriched is record:
            out.append(item)
            continue
        report.updated += 1
        out.append(_patched_item(item, record, enriched))

    if report.updated:
        write_restaurants(path, out)
        report.written = True
        logger.info("Successfully updated %s restaurants.", report.updated)
    else:
        logger.info("No updates were needed.")
    return report
