# src/rstable/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/rstable/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `RSTABLE_CONFIG_PATH`
- a small whitelist of environment variables (e.g., `GOOGLE_SHEET_ID`, `PORT`)

Design rule:
- Endpoints, paths and tuning knobs live in YAML, not hard-coded in business logic.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from rstable.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `rstable.config`."""
    text = resources.files("rstable.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "rsTable"
    timezone: str = "Europe/Madrid"
    http_timeout_seconds: float = 15
    log_level: str = "INFO"


class ServerSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(3001, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=list)
    cors_allow_local: bool = True


class CatalogSettings(BaseModel):
    path: str = "data/restaurants.json"


class ViewerLocation(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class ViewSettings(BaseModel):
    api_url: str = "http://localhost:3001"
    search_min_chars: int = Field(3, ge=0)
    viewer_location: ViewerLocation | None = None


class SheetsSettings(BaseModel):
    sheet_id: str | None = None
    gid: int = 0
    export_url: str = "https://docs.google.com/spreadsheets/d/{sheet_id}/export"


class GeocodingSettings(BaseModel):
    base_url: str = "https://nominatim.openstreetmap.org"
    user_agent: str = "RsTableApp/1.0 (github.com/olivaalbert1/rsTable)"
    referer: str = "https://github.com/olivaalbert1/rsTable"
    max_per_minute: float = Field(60, gt=0)
    maps_search_url: str = "https://www.google.com/maps/search/?api=1&query={query}"


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    view: ViewSettings = Field(default_factory=ViewSettings)
    sheets: SheetsSettings = Field(default_factory=SheetsSettings)
    geocoding: GeocodingSettings = Field(default_factory=GeocodingSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small.
    """
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("RSTABLE_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    data_file = os.getenv("RSTABLE_DATA_FILE")
    if data_file:
        data.setdefault("catalog", {})["path"] = data_file

    port = os.getenv("PORT")
    if port:
        data.setdefault("server", {})["port"] = port

    cors = os.getenv("RSTABLE_CORS_ORIGINS")
    if cors:
        data.setdefault("server", {})["cors_origins"] = [s.strip() for s in cors.split(",") if s.strip()]

    api_url = os.getenv("RSTABLE_API_URL")
    if api_url:
        data.setdefault("view", {})["api_url"] = api_url

    sheet_id = os.getenv("GOOGLE_SHEET_ID")
    if sheet_id:
        data.setdefault("sheets", {})["sheet_id"] = sheet_id

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("RSTABLE_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
