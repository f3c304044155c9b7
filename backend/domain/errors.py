"""
User-facing errors raised by the location service.

The error kind is fixed per class; the display message is looked up per locale
so call sites never carry message text.
"""
from typing import Dict, Optional


DEFAULT_LOCALE = "id"

MESSAGES: Dict[str, Dict[str, str]] = {
    "id": {
        "search_failed": "Gagal mencari lokasi. Periksa koneksi internet atau coba lagi nanti.",
        "detail_failed": "Gagal mendapatkan detail lokasi.",
        "unknown_location": "Tidak dikenal",
    },
    "en": {
        "search_failed": "Failed to search locations. Check your connection or try again later.",
        "detail_failed": "Failed to get location details.",
        "unknown_location": "Unknown",
    },
}


def localized_message(key: str, locale: Optional[str] = None) -> str:
    """Return the message for `key`, falling back to the default locale."""
    table = MESSAGES.get((locale or DEFAULT_LOCALE).lower(), MESSAGES[DEFAULT_LOCALE])
    return table.get(key) or MESSAGES[DEFAULT_LOCALE].get(key, key)


class LocationServiceError(Exception):
    kind = "location_error"

    def __init__(self, locale: Optional[str] = None) -> None:
        self.locale = locale or DEFAULT_LOCALE
        self.message = localized_message(self.kind, self.locale)
        super().__init__(self.message)


class LocationSearchError(LocationServiceError):
    """Forward geocoding failed (network, timeout or malformed response)."""
    kind = "search_failed"


class LocationDetailError(LocationServiceError):
    """Reverse geocoding failed (network or timeout)."""
    kind = "detail_failed"
