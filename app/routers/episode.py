"""Podcast episode routes."""
from fastapi import APIRouter, Depends

from app import deezer_client
from app.models import RESOURCE_RESPONSES
from app.responses import relay
from app.validation import resource_id

router = APIRouter(prefix="/episode", tags=["Episode"])


@router.get("/{id}", summary="Get episode by ID", responses=RESOURCE_RESPONSES)
async def get_episode(episode_id: int = Depends(resource_id)):
    return relay(await deezer_client.fetch(f"/episode/{episode_id}"))
