from fastapi import APIRouter, Depends

from cosmic_atlas.api.deps import get_iss_client, respond
from cosmic_atlas.schemas.envelope import APIResponse
from cosmic_atlas.schemas.iss import AstronautRoster, ISSPosition
from cosmic_atlas.services.iss import ISSClient

router = APIRouter()


@router.get("/position", response_model=APIResponse[ISSPosition])
async def get_position(client: ISSClient = Depends(get_iss_client)):
    return respond(await client.get_position())


@router.get("/astronauts", response_model=APIResponse[AstronautRoster])
async def get_astronauts(client: ISSClient = Depends(get_iss_client)):
    """Everyone currently in space; filter on ``craft`` for the ISS crew."""
    return respond(await client.get_astronauts())
