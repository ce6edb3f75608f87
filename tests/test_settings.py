import pytest

from rstable.config.settings import get_settings


@pytest.fixture
def fresh_settings():
    # `get_settings` is cached; clear it so env overrides are re-read.
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()


def test_packaged_defaults(fresh_settings, monkeypatch):
    for name in ["RSTABLE_CONFIG_PATH", "RSTABLE_DATA_FILE", "RSTABLE_API_URL", "PORT", "RSTABLE_LOG_LEVEL"]:
        monkeypatch.delenv(name, raising=False)

    settings = fresh_settings()
    assert settings.catalog.path == "data/restaurants.json"
    assert settings.server.port == 3001
    assert settings.view.search_min_chars == 3
    assert settings.geocoding.max_per_minute == 60
    assert settings.view.viewer_location is None


def test_env_overrides_are_whitelisted(fresh_settings, monkeypatch):
    monkeypatch.setenv("RSTABLE_DATA_FILE", "/tmp/other.json")
    monkeypatch.setenv("RSTABLE_API_URL", "http://example.test:9000")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("GOOGLE_SHEET_ID", "sheet-123")
    monkeypatch.setenv("RSTABLE_CORS_ORIGINS", "https://a.test, https://b.test")

    settings = fresh_settings()
    assert settings.catalog.path == "/tmp/other.json"
    assert settings.view.api_url == "http://example.test:9000"
    assert settings.server.port == 8080
    assert settings.sheets.sheet_id == "sheet-123"
    assert settings.server.cors_origins == ["https://a.test", "https://b.test"]


def test_external_config_file(fresh_settings, monkeypatch, tmp_path):
    cfg = tmp_path / "rstable.yaml"
    cfg.write_text("view:\n  search_min_chars: 2\n  viewer_location: {lat: 41.0, lng: 2.0}\n", encoding="utf-8")
    monkeypatch.setenv("RSTABLE_CONFIG_PATH", str(cfg))

    settings = fresh_settings()
    assert settings.view.search_min_chars == 2
    assert settings.view.viewer_location.lat == 41.0
    # Sections missing from the file fall back to model defaults.
    assert settings.catalog.path == "data/restaurants.json"
