from datetime import date as Date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from cosmic_atlas.api.deps import get_nasa_client, respond
from cosmic_atlas.schemas.envelope import APIResponse
from cosmic_atlas.schemas.nasa import APOD, EarthImagery, NearEarthObject, RoverPhoto, hazardous_objects
from cosmic_atlas.services.nasa import NASAClient

router = APIRouter()


class RoverPhotos(BaseModel):
    photos: List[RoverPhoto] = []


def _iso(value: Optional[Date]) -> Optional[str]:
    return value.isoformat() if value else None


@router.get("/apod", response_model=APIResponse[APOD])
async def get_apod(
    date: Optional[Date] = Query(None, description="YYYY-MM-DD, defaults to today"),
    client: NASAClient = Depends(get_nasa_client),
):
    """Astronomy Picture of the Day."""
    return respond(await client.get_apod(_iso(date)))


@router.get("/mars/{rover}/photos", response_model=APIResponse[RoverPhotos])
async def get_mars_photos(
    rover: str,
    sol: Optional[int] = Query(None, ge=0),
    earth_date: Optional[Date] = Query(None),
    camera: Optional[str] = Query(None, description="FHAZ, RHAZ, MAST, CHEMCAM, MAHLI, MARDI, NAVCAM, PANCAM, MINITES"),
    client: NASAClient = Depends(get_nasa_client),
):
    """
    Mars rover photos. Sol wins over earth_date; sol 1000 when neither is given.
    """
    return respond(await client.get_mars_photos(rover, sol, _iso(earth_date), camera))


@router.get("/neo", response_model=APIResponse[Dict[str, Any]])
async def get_near_earth_objects(
    start_date: Date,
    end_date: Date,
    client: NASAClient = Depends(get_nasa_client),
):
    return respond(await client.get_near_earth_objects(_iso(start_date), _iso(end_date)))


@router.get("/earth/imagery", response_model=APIResponse[EarthImagery])
async def get_earth_imagery(
    lat: float = Query(..., ge=-90.0, le=90.0),
    lon: float = Query(..., ge=-180.0, le=180.0),
    date: Optional[Date] = Query(None),
    dim: float = Query(default=0.025, ge=0.025, le=0.5),
    client: NASAClient = Depends(get_nasa_client),
):
    """Landsat 8 imagery for a point; most recent when no date is given."""
    return respond(await client.get_earth_imagery(lat, lon, _iso(date), dim))


@router.get("/donki/{event_type}", response_model=APIResponse[List[Dict[str, Any]]])
async def get_donki_events(
    event_type: str,
    start_date: Date,
    end_date: Date,
    client: NASAClient = Depends(get_nasa_client),
):
    """DONKI events. Unknown event types fall back to FLR."""
    return respond(await client.get_donki_events(event_type, _iso(start_date), _iso(end_date)))


@router.get("/neo/hazardous", response_model=APIResponse[List[NearEarthObject]])
async def get_hazardous_objects(
    start_date: Date,
    end_date: Date,
    client: NASAClient = Depends(get_nasa_client),
):
    """Potentially hazardous asteroids in the window, ordered by approach date."""
    result = await client.get_near_earth_objects(_iso(start_date), _iso(end_date))
    if result.success:
        result.data = [neo.model_dump() for neo in hazardous_objects(result.data)]
    return respond(result)
