"""
Data fetch adapter.

Retrieves the whole restaurant collection from the API in a single GET. Any
failure (transport error, non-2xx status, body that is not a JSON array) is
raised as `FetchFailure`; the view decides how to degrade.
"""

from __future__ import annotations

import logging

import httpx

from rstable.catalog.loader import parse_records
from rstable.core.errors import FetchFailure
from rstable.core.http import get_json
from rstable.domain.models import RestaurantRecord

logger = logging.getLogger(__name__)

RESTAURANTS_PATH = "/api/restaurants"


def restaurants_url(api_url: str) -> str:
    return f"{api_url.rstrip('/')}{RESTAURANTS_PATH}"


def fetch_restaurants(api_url: str, *, timeout_seconds: float = 15) -> list[RestaurantRecord]:
    """GET the collection and validate it.

    Raises:
        FetchFailure: On any retrieval or decoding problem.
    """
    url = restaurants_url(api_url)
    logger.info("Fetching restaurants from %s", url)
    try:
        payload = get_json(url, timeout_seconds=timeout_seconds)
    except httpx.HTTPStatusError as e:
        raise FetchFailure(f"GET {url} returned HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise FetchFailure(f"GET {url} failed: {type(e).__name__}: {e}") from e
    except ValueError as e:
        raise FetchFailure(f"GET {url} returned invalid JSON") from e

    if not isinstance(payload, list):
        raise FetchFailure(f"GET {url} returned {type(payload).__name__}, expected a JSON array")
    return parse_records(payload)
