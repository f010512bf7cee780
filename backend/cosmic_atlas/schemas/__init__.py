from cosmic_atlas.schemas.envelope import APIResponse as APIResponse, APIError as APIError, ResponseMetadata as ResponseMetadata
from cosmic_atlas.schemas.nasa import APOD as APOD, RoverPhoto as RoverPhoto, NearEarthObject as NearEarthObject, EarthImagery as EarthImagery
from cosmic_atlas.schemas.space_weather import (
    SolarWind as SolarWind,
    GeomagneticActivity as GeomagneticActivity,
    AuroraForecast as AuroraForecast,
    SolarFlare as SolarFlare,
    CoronalMassEjection as CoronalMassEjection,
)
from cosmic_atlas.schemas.iss import ISSPosition as ISSPosition, Astronaut as Astronaut, AstronautRoster as AstronautRoster
