import pytest

from domain.errors import LocationSearchError, localized_message
from services import geocoding as geo
from settings import Settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "NOMINATIM_BASE_URL",
        "NOMINATIM_APP_NAME",
        "NOMINATIM_CONTACT",
        "NOMINATIM_USER_AGENT",
        "NOMINATIM_REFERER",
        "NOMINATIM_TIMEOUT_SEC",
        "LOCATION_LOCALE",
    ):
        monkeypatch.delenv(name, raising=False)


def test_settings_defaults(clean_env):
    s = Settings()
    assert s.NOMINATIM_BASE_URL == "https://nominatim.openstreetmap.org"
    assert s.NOMINATIM_TIMEOUT_SEC == 5.0
    assert s.LOCATION_LOCALE == "id"
    assert s.NOMINATIM_CONTACT is None


def test_config_from_settings_reads_environment(clean_env, monkeypatch):
    monkeypatch.setenv("NOMINATIM_BASE_URL", "http://localhost:8080/")
    monkeypatch.setenv("NOMINATIM_APP_NAME", "Foresky/2.0")
    monkeypatch.setenv("NOMINATIM_CONTACT", "ops@example.org")
    monkeypatch.setenv("NOMINATIM_REFERER", "https://foresky.example")
    monkeypatch.setenv("NOMINATIM_TIMEOUT_SEC", "2.5")
    monkeypatch.setenv("LOCATION_LOCALE", "en")

    cfg = geo.NominatimConfig.from_settings(Settings())

    assert cfg.base_url == "http://localhost:8080"
    assert cfg.timeout == 2.5
    assert cfg.accept_language == "en"
    assert cfg.headers == {
        "User-Agent": "Foresky/2.0 (ops@example.org)",
        "Referer": "https://foresky.example",
    }


def test_bad_timeout_falls_back_to_default(clean_env, monkeypatch):
    monkeypatch.setenv("NOMINATIM_TIMEOUT_SEC", "soon")
    assert Settings().NOMINATIM_TIMEOUT_SEC == 5.0


def test_explicit_user_agent_wins():
    cfg = geo.NominatimConfig(user_agent="Custom/1.0 (me@example.com)")
    assert cfg.headers == {"User-Agent": "Custom/1.0 (me@example.com)"}


def test_default_config_identifies_client():
    cfg = geo.NominatimConfig()
    assert cfg.headers["User-Agent"] == "ForeskyWeatherApp/1.0 (example@example.com)"
    assert cfg.accept_language == "id,en"


def test_redact_email_hides_contact():
    assert geo._redact_email("App/1.0 (dev@example.com)") == "App/1.0 (<redacted>)"
    assert geo._redact_email("App/1.0") == "App/1.0"


def test_localized_messages_fall_back_to_default_locale():
    assert localized_message("search_failed", "de") == localized_message("search_failed", "id")
    assert LocationSearchError("EN").message == localized_message("search_failed", "en")
