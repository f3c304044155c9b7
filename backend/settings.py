import os

# Basic settings helper to read environment configuration.


def _as_float(val: str | None, default: float) -> float:
    if val is None or not val.strip():
        return default
    try:
        return float(val)
    except ValueError:
        return default


class Settings:
    def __init__(self) -> None:
        self.NOMINATIM_BASE_URL: str = os.getenv(
            "NOMINATIM_BASE_URL", "https://nominatim.openstreetmap.org"
        )
        self.NOMINATIM_APP_NAME: str = os.getenv("NOMINATIM_APP_NAME", "ForeskyWeatherApp/1.0")
        self.NOMINATIM_CONTACT: str | None = os.getenv("NOMINATIM_CONTACT")
        self.NOMINATIM_USER_AGENT: str | None = os.getenv("NOMINATIM_USER_AGENT")
        self.NOMINATIM_REFERER: str | None = os.getenv("NOMINATIM_REFERER")
        self.NOMINATIM_TIMEOUT_SEC: float = _as_float(os.getenv("NOMINATIM_TIMEOUT_SEC"), 5.0)
        self.LOCATION_LOCALE: str = os.getenv("LOCATION_LOCALE", "id")


settings = Settings()
