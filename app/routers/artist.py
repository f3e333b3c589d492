"""Artist routes."""
from fastapi import APIRouter, Depends

from app import deezer_client
from app.models import RESOURCE_RESPONSES, SUBRESOURCE_RESPONSES
from app.responses import relay
from app.validation import PaginationQuery, pagination, resource_id

router = APIRouter(prefix="/artist", tags=["Artist"])


@router.get("/{id}", summary="Get artist by ID", responses=RESOURCE_RESPONSES)
async def get_artist(artist_id: int = Depends(resource_id)):
    return relay(await deezer_client.fetch(f"/artist/{artist_id}"))


@router.get("/{id}/top", summary="Get artist top tracks", responses=SUBRESOURCE_RESPONSES)
async def get_artist_top(
    artist_id: int = Depends(resource_id),
    page: PaginationQuery = Depends(pagination),
):
    return relay(await deezer_client.fetch(f"/artist/{artist_id}/top", page.params()))


@router.get("/{id}/albums", summary="Get artist albums", responses=SUBRESOURCE_RESPONSES)
async def get_artist_albums(
    artist_id: int = Depends(resource_id),
    page: PaginationQuery = Depends(pagination),
):
    return relay(await deezer_client.fetch(f"/artist/{artist_id}/albums", page.params()))
