"""
Locations API routes.

Endpoints are plain `def` so the blocking Nominatim calls run in the threadpool.
"""
import logging
from typing import Any, List, Optional
from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from domain.errors import LocationDetailError, LocationSearchError
from services.geocoding import (
    get_location_details,
    get_popular_cities,
    is_valid_coordinate,
    search_locations,
)

router = APIRouter()
logger = logging.getLogger(__name__)


class LocationCandidateResponse(BaseModel):
    id: Optional[Any] = None
    name: str
    fullName: Optional[str] = None
    lat: float
    lon: float
    type: str
    importance: float


class LocationDetailResponse(BaseModel):
    name: str
    fullName: Optional[str] = None
    lat: float
    lon: float
    address: Optional[Any] = None
    type: str


class PopularCityResponse(BaseModel):
    name: str
    lat: float
    lon: float
    fullName: str


@router.get("/search", response_model=List[LocationCandidateResponse])
def search(
    q: Optional[str] = None,
    limit: int = Query(5, ge=1, le=50),
):
    """Forward geocode a free-text query."""
    try:
        candidates = search_locations(q, limit=limit)
    except LocationSearchError as exc:
        raise HTTPException(status_code=502, detail=exc.message)
    return [LocationCandidateResponse(**c.to_dict()) for c in candidates]


@router.get("/reverse", response_model=LocationDetailResponse)
def reverse(lat: float, lon: float):
    """Describe the place at a coordinate pair."""
    if not is_valid_coordinate(lat, lon):
        raise HTTPException(status_code=422, detail="Invalid coordinate")
    try:
        detail = get_location_details(lat, lon)
    except LocationDetailError as exc:
        raise HTTPException(status_code=502, detail=exc.message)
    if detail is None:
        logger.info("No location found at lat=%s lon=%s", lat, lon)
        raise HTTPException(status_code=404, detail="Location not found")
    return LocationDetailResponse(**detail.to_dict())


@router.get("/popular", response_model=List[PopularCityResponse])
def popular():
    """Static shortcut list of popular cities."""
    return [PopularCityResponse(**city.to_dict()) for city in get_popular_cities()]
