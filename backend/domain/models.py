"""
Core domain models for the location lookup service.
These are framework-agnostic and can be used across all services.
"""
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


UNKNOWN_TYPE = "unknown"


@dataclass
class NominatimRecord:
    """
    A single raw place record as returned by Nominatim /search or /reverse.

    Every field is optional upstream. Absence is kept as None so that valid
    zero-like values ("0", 0.0) are never mistaken for missing data.
    """
    place_id: Optional[Any] = None
    lat: Optional[str] = None
    lon: Optional[str] = None
    display_name: Optional[str] = None
    type: Optional[str] = None
    importance: Optional[float] = None
    address: Optional[Dict[str, Any]] = None
    namedetails: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NominatimRecord":
        address = data.get("address")
        namedetails = data.get("namedetails")
        return cls(
            place_id=data.get("place_id"),
            lat=data.get("lat"),
            lon=data.get("lon"),
            display_name=data.get("display_name"),
            type=data.get("type"),
            importance=data.get("importance"),
            address=address if isinstance(address, dict) else None,
            namedetails=namedetails if isinstance(namedetails, dict) else None,
        )

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lon is not None


@dataclass
class LocationCandidate:
    """One forward-geocoding match."""
    id: Any
    name: str
    full_name: Optional[str]
    lat: float
    lon: float
    type: str = UNKNOWN_TYPE
    importance: float = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "fullName": self.full_name,
            "lat": self.lat,
            "lon": self.lon,
            "type": self.type,
            "importance": self.importance,
        }


@dataclass
class LocationDetail:
    """
    Reverse-geocoding result for a coordinate pair.

    `address` is the structured Nominatim address breakdown, passed through
    unchanged.
    """
    name: str
    full_name: Optional[str]
    lat: float
    lon: float
    address: Optional[Any] = None
    type: str = UNKNOWN_TYPE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "fullName": self.full_name,
            "lat": self.lat,
            "lon": self.lon,
            "address": self.address,
            "type": self.type,
        }


@dataclass(frozen=True)
class PopularCity:
    name: str
    lat: float
    lon: float
    full_name: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "lat": self.lat,
            "lon": self.lon,
            "fullName": self.full_name,
        }
