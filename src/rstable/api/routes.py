"""
API routes.

Endpoints:
- GET `/api/restaurants`: the whole data file as a JSON array (no filtering, no paging).
- GET `/api/place-details/{place_id}`: placeholder for a future server-side Maps lookup.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fastapi import APIRouter

from rstable.catalog.loader import read_raw
from rstable.config.settings import get_settings
from rstable.core.env import resolve_project_path

logger = logging.getLogger(__name__)

router = APIRouter()


def _data_path() -> Path:
    return resolve_project_path(get_settings().catalog.path)


@router.get("/api/restaurants")
def get_restaurants() -> list[Any]:
    """Return every restaurant in the data file; an unreadable file yields `[]`."""
    path = _data_path()
    try:
        return read_raw(path)
    except (OSError, ValueError) as e:
        logger.error("Error reading data file %s: %s", path, e)
        return []


@router.get("/api/place-details/{place_id}")
def get_place_details(place_id: str) -> dict[str, str]:
    """Stub kept for API compatibility with clients that link place ids."""
    return {"message": "Place details proxy endpoint"}
