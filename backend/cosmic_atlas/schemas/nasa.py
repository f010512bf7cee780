"""Transfer shapes for NASA Open API payloads. Unknown vendor keys pass through."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class VendorRecord(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class APOD(VendorRecord):
    date: Optional[str] = None
    title: Optional[str] = None
    explanation: Optional[str] = None
    url: Optional[str] = None
    hdurl: Optional[str] = None
    media_type: Optional[str] = None
    copyright: Optional[str] = None


class RoverCamera(VendorRecord):
    id: Optional[int] = None
    name: Optional[str] = None
    full_name: Optional[str] = None


class RoverPhoto(VendorRecord):
    id: int
    sol: Optional[int] = None
    img_src: Optional[str] = None
    earth_date: Optional[str] = None
    camera: Optional[RoverCamera] = None
    rover: Optional[Dict[str, Any]] = None


class CloseApproach(VendorRecord):
    close_approach_date: Optional[str] = None
    relative_velocity: Optional[Dict[str, Any]] = None
    miss_distance: Optional[Dict[str, Any]] = None
    orbiting_body: Optional[str] = None


class NearEarthObject(VendorRecord):
    id: str
    name: Optional[str] = None
    absolute_magnitude_h: Optional[float] = None
    estimated_diameter: Optional[Dict[str, Any]] = None
    is_potentially_hazardous_asteroid: bool = False
    close_approach_data: List[CloseApproach] = []


class EarthImagery(VendorRecord):
    date: Optional[str] = None
    id: Optional[str] = None
    url: Optional[str] = None
    resource: Optional[Dict[str, Any]] = None


def hazardous_objects(feed: Dict[str, Any]) -> List[NearEarthObject]:
    """
    Flatten a NeoWs feed payload and keep the potentially hazardous objects,
    ordered by their first close approach date.
    """
    objects = []
    for day in sorted((feed or {}).get("near_earth_objects", {})):
        for raw in feed["near_earth_objects"][day]:
            neo = NearEarthObject.model_validate(raw)
            if neo.is_potentially_hazardous_asteroid:
                objects.append(neo)
    return objects
