from fastapi import Request
from fastapi.responses import JSONResponse

from cosmic_atlas.schemas.envelope import APIResponse
from cosmic_atlas.services.iss import ISSClient
from cosmic_atlas.services.nasa import NASAClient
from cosmic_atlas.services.space_weather import SpaceWeatherClient


def get_nasa_client(request: Request) -> NASAClient:
    return request.app.state.nasa


def get_space_weather_client(request: Request) -> SpaceWeatherClient:
    return request.app.state.space_weather


def get_iss_client(request: Request) -> ISSClient:
    return request.app.state.iss


def respond(result: APIResponse):
    """Successful envelopes go through the route's response model; failures become 502."""
    if result.success:
        return result
    return JSONResponse(status_code=502, content=result.model_dump())
