"""Podcast routes."""
from fastapi import APIRouter, Depends

from app import deezer_client
from app.models import RESOURCE_RESPONSES, SUBRESOURCE_RESPONSES
from app.responses import relay
from app.validation import PaginationQuery, pagination, resource_id

router = APIRouter(prefix="/podcast", tags=["Podcast"])


@router.get("/{id}", summary="Get podcast by ID", responses=RESOURCE_RESPONSES)
async def get_podcast(podcast_id: int = Depends(resource_id)):
    return relay(await deezer_client.fetch(f"/podcast/{podcast_id}"))


@router.get("/{id}/episodes", summary="Get podcast episodes", responses=SUBRESOURCE_RESPONSES)
async def get_podcast_episodes(
    podcast_id: int = Depends(resource_id),
    page: PaginationQuery = Depends(pagination),
):
    return relay(await deezer_client.fetch(f"/podcast/{podcast_id}/episodes", page.params()))
