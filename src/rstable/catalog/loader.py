"""
Restaurant data file loader.

The data file is a flat JSON array (default: `data/restaurants.json`) written by the
offline jobs and served as-is by the API. Reads validate each entry into a
`RestaurantRecord`; writes rewrite the whole file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from pydantic import ValidationError

from rstable.core.env import resolve_project_path
from rstable.domain.models import RestaurantRecord

logger = logging.getLogger(__name__)


def read_raw(path: str | Path) -> list[dict[str, Any]]:
    """Return the raw JSON array stored at `path`.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the content is not JSON or not an array.
    """
    resolved = resolve_project_path(path)
    payload = json.loads(resolved.read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        raise ValueError(f"Invalid data file {resolved}: expected a JSON array.")
    return payload


def describe_validation_error(e: ValidationError) -> str:
    """Flatten a validation error into `loc: msg` pairs for a single log line."""
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}" for err in e.errors()
    )


def parse_records(payload: Iterable[Any]) -> list[RestaurantRecord]:
    """Validate items one by one, dropping (and logging) those that cannot be parsed at all."""
    records: list[RestaurantRecord] = []
    for i, item in enumerate(payload):
        if not isinstance(item, dict):
            logger.warning("Skipping restaurant #%s: expected an object, got %s", i, type(item).__name__)
            continue
        try:
            records.append(RestaurantRecord.model_validate(item))
        except ValidationError as e:
            logger.warning("Skipping restaurant #%s (%s): %s", i, item.get("id"), describe_validation_error(e))
    return records


def load_restaurants(path: str | Path) -> list[RestaurantRecord]:
    """Load and validate the restaurant data file."""
    return parse_records(read_raw(path))


def write_restaurants(path: str | Path, records: Iterable[RestaurantRecord | dict[str, Any]]) -> Path:
    """Replace the data file with `records` (pretty-printed, 2-space indent)."""
    resolved = resolve_project_path(path)
    payload = [r.to_json() if isinstance(r, RestaurantRecord) else r for r in records]
    resolved.parent.mkdir(parents=True, exist_ok=True)
    resolved.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return resolved
