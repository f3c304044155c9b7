"""Forward and reverse geocoding helpers using OpenStreetMap Nominatim.

Each lookup issues exactly one GET and reshapes the JSON into domain records.
Upstream failures are logged here and surfaced to callers only as generic,
localized errors.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

import requests

from domain.errors import LocationDetailError, LocationSearchError, localized_message
from domain.models import (
    UNKNOWN_TYPE,
    LocationCandidate,
    LocationDetail,
    NominatimRecord,
    PopularCity,
)
from settings import Settings, settings

NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"
REVERSE_ZOOM = 10
logger = logging.getLogger(__name__)
_session = requests.Session()
_logged_ua = False

FALLBACK_CONTACT = "example@example.com"
if settings.NOMINATIM_USER_AGENT is None and settings.NOMINATIM_CONTACT is None:
    logger.warning(
        "NOMINATIM_CONTACT not set in environment; using fallback contact. "
        "This may violate Nominatim usage policy."
    )

# Address fields scanned for a display name, most specific first.
ADDRESS_NAME_FIELDS = (
    "city",
    "town",
    "village",
    "suburb",
    "neighbourhood",
    "county",
    "state_district",
    "state",
    "region",
)

POPULAR_CITIES = (
    PopularCity("Jakarta", -6.2088, 106.8456, "Jakarta, Indonesia"),
    PopularCity("Bogor", -6.5950, 106.8161, "Bogor, Jawa Barat, Indonesia"),
    PopularCity("Bandung", -6.9175, 107.6191, "Bandung, Jawa Barat, Indonesia"),
    PopularCity("Surabaya", -7.2575, 112.7521, "Surabaya, Jawa Timur, Indonesia"),
    PopularCity("Yogyakarta", -7.7956, 110.3695, "Yogyakarta, Indonesia"),
    PopularCity("Medan", 3.5952, 98.6722, "Medan, Sumatera Utara, Indonesia"),
    PopularCity("Semarang", -6.9669, 110.4203, "Semarang, Jawa Tengah, Indonesia"),
    PopularCity("Makassar", -5.1477, 119.4327, "Makassar, Sulawesi Selatan, Indonesia"),
    PopularCity("Palembang", -2.9761, 104.7754, "Palembang, Sumatera Selatan, Indonesia"),
    PopularCity("Tangerang", -6.1701, 106.6403, "Tangerang, Banten, Indonesia"),
)


@dataclass(frozen=True)
class NominatimConfig:
    base_url: str = NOMINATIM_BASE_URL
    app_name: str = "ForeskyWeatherApp/1.0"
    contact: str = FALLBACK_CONTACT
    timeout: float = 5.0
    locale: str = "id"
    user_agent: Optional[str] = None
    referer: Optional[str] = None

    @classmethod
    def from_settings(cls, source: Optional[Settings] = None) -> "NominatimConfig":
        s = source or settings
        return cls(
            base_url=s.NOMINATIM_BASE_URL.rstrip("/"),
            app_name=s.NOMINATIM_APP_NAME,
            contact=s.NOMINATIM_CONTACT or FALLBACK_CONTACT,
            timeout=s.NOMINATIM_TIMEOUT_SEC,
            locale=s.LOCATION_LOCALE,
            user_agent=s.NOMINATIM_USER_AGENT,
            referer=s.NOMINATIM_REFERER,
        )

    @property
    def user_agent_header(self) -> str:
        """Nominatim requires an application name plus a contact address."""
        return self.user_agent or f"{self.app_name} ({self.contact})"

    @property
    def headers(self) -> Dict[str, str]:
        headers = {"User-Agent": self.user_agent_header}
        if self.referer:
            headers["Referer"] = self.referer
        return headers

    @property
    def accept_language(self) -> str:
        return ",".join(dict.fromkeys([self.locale, "en"]))


def _redact_email(ua: str) -> str:
    if "@" not in ua:
        return ua
    return re.sub(r"[^\s(]+@[^\s)]+", "<redacted>", ua)


def _nominatim_get(path: str, params: Dict[str, Any], config: NominatimConfig) -> Any:
    """GET `{base_url}/{path}` and decode the JSON body; None for an empty body."""
    global _logged_ua
    if not _logged_ua:
        logger.debug("Nominatim User-Agent: %s", _redact_email(config.user_agent_header))
        _logged_ua = True

    resp = _session.get(
        f"{config.base_url.rstrip('/')}/{path}",
        params=params,
        headers=config.headers,
        timeout=config.timeout,
    )
    resp.raise_for_status()
    if not resp.content:
        return None
    return resp.json()


def _parse_coord(value: Any) -> Optional[float]:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return parsed if math.isfinite(parsed) else None


def _lookup_params(config: NominatimConfig) -> Dict[str, Any]:
    return {
        "format": "json",
        "accept-language": config.accept_language,
        "addressdetails": 1,
        "extratags": 1,
        "namedetails": 1,
    }


def resolve_location_name(
    record: Union[NominatimRecord, Mapping[str, Any]],
    locale: Optional[str] = None,
) -> str:
    """Pick a short display name for one raw Nominatim record.

    Priority: namedetails name, then the first populated address field in
    ADDRESS_NAME_FIELDS order, then the first segment of display_name, then
    the localized "unknown" string.
    """
    if not isinstance(record, NominatimRecord):
        record = NominatimRecord.from_dict(record)

    if record.namedetails:
        name = record.namedetails.get("name")
        if name:
            return str(name)

    if record.address:
        for field in ADDRESS_NAME_FIELDS:
            value = record.address.get(field)
            if value:
                return str(value)

    if isinstance(record.display_name, str):
        head = record.display_name.split(",")[0].strip()
        if head:
            return head

    return localized_message("unknown_location", locale or settings.LOCATION_LOCALE)


def _to_candidate(record: NominatimRecord, lat: float, lon: float, locale: str) -> LocationCandidate:
    return LocationCandidate(
        id=record.place_id,
        name=resolve_location_name(record, locale),
        full_name=record.display_name,
        lat=lat,
        lon=lon,
        type=record.type if record.type is not None else UNKNOWN_TYPE,
        importance=record.importance if record.importance is not None else 0,
    )


def search_locations(
    query: Optional[str],
    limit: int = 5,
    config: Optional[NominatimConfig] = None,
) -> List[LocationCandidate]:
    """Forward geocode a free-text query into candidate locations.

    Queries shorter than two characters return [] without touching the network.
    Raises LocationSearchError on any transport or response-shape failure.
    """
    if not query or len(query) < 2:
        return []

    cfg = config or NominatimConfig.from_settings()
    params = _lookup_params(cfg)
    params.update({"q": query, "limit": limit})

    try:
        data = _nominatim_get("search", params, cfg)
        if not isinstance(data, list):
            raise ValueError(
                f"malformed upstream response: expected a list, got {type(data).__name__}"
            )
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Nominatim search error for q=%r: %s", query, exc)
        raise LocationSearchError(cfg.locale) from None

    results: List[LocationCandidate] = []
    for item in data:
        if not isinstance(item, dict):
            logger.debug("Skipping non-object search result: %r", item)
            continue
        record = NominatimRecord.from_dict(item)
        if not record.has_coordinates:
            continue
        lat = _parse_coord(record.lat)
        lon = _parse_coord(record.lon)
        if lat is None or lon is None:
            logger.debug(
                "Skipping result %s with unparseable coordinates lat=%r lon=%r",
                record.place_id,
                record.lat,
                record.lon,
            )
            continue
        results.append(_to_candidate(record, lat, lon, cfg.locale))
    return results


def get_location_details(
    lat: float,
    lon: float,
    config: Optional[NominatimConfig] = None,
) -> Optional[LocationDetail]:
    """Reverse geocode a coordinate pair at city/district granularity.

    Returns None when Nominatim has nothing at that point. Raises
    LocationDetailError on transport failures or a non-numeric coordinate.
    """
    cfg = config or NominatimConfig.from_settings()
    req_lat = _parse_coord(lat)
    req_lon = _parse_coord(lon)
    if req_lat is None or req_lon is None:
        logger.warning("Reverse lookup rejected non-numeric coordinate lat=%r lon=%r", lat, lon)
        raise LocationDetailError(cfg.locale)

    params = _lookup_params(cfg)
    params.update({"lat": req_lat, "lon": req_lon, "zoom": REVERSE_ZOOM})

    try:
        data = _nominatim_get("reverse", params, cfg)
        if data and not isinstance(data, dict):
            raise ValueError(
                f"malformed upstream response: expected an object, got {type(data).__name__}"
            )
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Nominatim reverse error for lat=%s lon=%s: %s", lat, lon, exc)
        raise LocationDetailError(cfg.locale) from None

    if not data:
        return None

    record = NominatimRecord.from_dict(data)
    if "error" in data and not record.has_coordinates:
        logger.debug("Nominatim found nothing at lat=%s lon=%s: %s", lat, lon, data["error"])
        return None

    parsed_lat = _parse_coord(record.lat)
    parsed_lon = _parse_coord(record.lon)
    return LocationDetail(
        name=resolve_location_name(record, cfg.locale),
        full_name=record.display_name,
        lat=parsed_lat if parsed_lat is not None else req_lat,
        lon=parsed_lon if parsed_lon is not None else req_lon,
        address=data.get("address"),
        type=record.type if record.type is not None else UNKNOWN_TYPE,
    )


def get_popular_cities() -> List[PopularCity]:
    """Fixed shortcut list of major Indonesian cities; no I/O."""
    return list(POPULAR_CITIES)


def is_valid_coordinate(lat: Any, lon: Any) -> bool:
    for value in (lat, lon):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
    return -90 <= lat <= 90 and -180 <= lon <= 180
