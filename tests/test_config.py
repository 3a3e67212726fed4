import pytest

from dineradar.core import config


def setup_function(function):
    config.get_settings.cache_clear()


def teardown_function(function):
    config.get_settings.cache_clear()


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda: None)


def test_get_settings_reads_env(monkeypatch):
    monkeypatch.setenv("MAPS_SERVER_KEY", "abc123")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("SEARCH_MAX_PAGE_FETCHES", "3")
    monkeypatch.setenv("SEARCH_PAGE_TOKEN_DELAY", "0.5")
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "7.5")
    monkeypatch.setenv("PLACES_REGION_CODE", "NZ")

    settings = config.get_settings()

    assert settings.google_api_key == "abc123"
    assert settings.port == 8080
    assert settings.max_page_fetches == 3
    assert settings.page_token_delay == 0.5
    assert settings.http_timeout == 7.5
    assert settings.region_code == "NZ"


def test_get_settings_falls_back_to_google_maps_key(monkeypatch):
    monkeypatch.delenv("MAPS_SERVER_KEY", raising=False)
    monkeypatch.setenv("GOOGLE_MAPS_KEY", "fallback")

    assert config.get_settings().google_api_key == "fallback"


def test_get_settings_warns_when_missing(monkeypatch, caplog):
    for name in ("MAPS_SERVER_KEY", "GOOGLE_MAPS_KEY", "PORT", "SEARCH_MAX_PAGE_FETCHES",
                 "SEARCH_PAGE_TOKEN_DELAY", "MATRIX_BATCH_SIZE", "HTTP_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)

    with caplog.at_level("WARNING"):
        settings = config.get_settings()

    assert "MAPS_SERVER_KEY is not configured" in " ".join(caplog.messages)
    assert settings.google_api_key == ""
    assert settings.port == 3000
    assert settings.max_page_fetches == 5
    assert settings.page_token_delay == 1.2
    assert settings.matrix_batch_size == 25
    assert settings.http_timeout is None


def test_matrix_batch_size_is_clamped(monkeypatch, caplog):
    monkeypatch.setenv("MAPS_SERVER_KEY", "key")
    monkeypatch.setenv("MATRIX_BATCH_SIZE", "100")

    with caplog.at_level("WARNING"):
        settings = config.get_settings()

    assert settings.matrix_batch_size == 25
    assert "clamping" in " ".join(caplog.messages)
