from datetime import date as Date
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from cosmic_atlas.api.deps import get_space_weather_client, respond
from cosmic_atlas.schemas.envelope import APIResponse
from cosmic_atlas.schemas.space_weather import (
    AuroraForecast,
    CoronalMassEjection,
    GeomagneticActivity,
    SolarFlare,
    SolarWind,
    parse_kp_index,
    parse_solar_wind,
)
from cosmic_atlas.services.space_weather import SpaceWeatherClient

router = APIRouter()


@router.get("/summary", response_model=APIResponse[Dict[str, Any]])
async def get_summary(client: SpaceWeatherClient = Depends(get_space_weather_client)):
    """
    Solar wind, Kp index, aurora and 3-day forecast in one call.
    Returns 502 unless every part could be fetched.
    """
    return respond(await client.get_space_weather_summary())


@router.get("/aurora", response_model=APIResponse[AuroraForecast])
async def get_aurora(client: SpaceWeatherClient = Depends(get_space_weather_client)):
    return respond(await client.get_aurora_forecast())


@router.get("/solar-wind", response_model=APIResponse[List[SolarWind]])
async def get_solar_wind(client: SpaceWeatherClient = Depends(get_space_weather_client)):
    result = await client.get_solar_wind()
    if result.success:
        result.data = [row.model_dump() for row in parse_solar_wind(result.data)]
    return respond(result)


@router.get("/kp-index", response_model=APIResponse[List[GeomagneticActivity]])
async def get_kp_index(client: SpaceWeatherClient = Depends(get_space_weather_client)):
    result = await client.get_geomagnetic_activity()
    if result.success:
        result.data = [row.model_dump() for row in parse_kp_index(result.data)]
    return respond(result)


@router.get("/forecast", response_model=APIResponse[Any])
async def get_forecast(client: SpaceWeatherClient = Depends(get_space_weather_client)):
    return respond(await client.get_3day_forecast())


@router.get("/flares", response_model=APIResponse[List[SolarFlare]])
async def get_solar_flares(start_date: Date, end_date: Date, client: SpaceWeatherClient = Depends(get_space_weather_client)):
    return respond(await client.get_solar_flares(start_date.isoformat(), end_date.isoformat()))


@router.get("/cme", response_model=APIResponse[List[CoronalMassEjection]])
async def get_cmes(start_date: Date, end_date: Date, client: SpaceWeatherClient = Depends(get_space_weather_client)):
    return respond(await client.get_cmes(start_date.isoformat(), end_date.isoformat()))


@router.get("/storms", response_model=APIResponse[List[Dict[str, Any]]])
async def get_geomagnetic_storms(start_date: Date, end_date: Date, client: SpaceWeatherClient = Depends(get_space_weather_client)):
    return respond(await client.get_geomagnetic_storms(start_date.isoformat(), end_date.isoformat()))


@router.get("/sep", response_model=APIResponse[List[Dict[str, Any]]])
async def get_sep_events(start_date: Date, end_date: Date, client: SpaceWeatherClient = Depends(get_space_weather_client)):
    return respond(await client.get_sep_events(start_date.isoformat(), end_date.isoformat()))
