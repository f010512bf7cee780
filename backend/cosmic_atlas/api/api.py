from fastapi import APIRouter
from cosmic_atlas.api.endpoints import nasa, space_weather, iss

api_router = APIRouter()

api_router.include_router(nasa.router, prefix="/nasa", tags=["nasa"])
api_router.include_router(space_weather.router, prefix="/space-weather", tags=["space-weather"])
api_router.include_router(iss.router, prefix="/iss", tags=["iss"])
