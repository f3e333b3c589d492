"""Playlist routes."""
from fastapi import APIRouter, Depends

from app import deezer_client
from app.models import RESOURCE_RESPONSES, SUBRESOURCE_RESPONSES
from app.responses import relay
from app.validation import PaginationQuery, pagination, resource_id

router = APIRouter(prefix="/playlist", tags=["Playlist"])


@router.get("/{id}", summary="Get playlist by ID", responses=RESOURCE_RESPONSES)
async def get_playlist(playlist_id: int = Depends(resource_id)):
    return relay(await deezer_client.fetch(f"/playlist/{playlist_id}"))


@router.get("/{id}/tracks", summary="Get playlist tracks", responses=SUBRESOURCE_RESPONSES)
async def get_playlist_tracks(
    playlist_id: int = Depends(resource_id),
    page: PaginationQuery = Depends(pagination),
):
    return relay(await deezer_client.fetch(f"/playlist/{playlist_id}/tracks", page.params()))


@router.get("/{id}/fans", summary="Get playlist fans", responses=SUBRESOURCE_RESPONSES)
async def get_playlist_fans(
    playlist_id: int = Depends(resource_id),
    page: PaginationQuery = Depends(pagination),
):
    return relay(await deezer_client.fetch(f"/playlist/{playlist_id}/fans", page.params()))
