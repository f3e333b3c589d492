"""Track routes."""
from fastapi import APIRouter, Depends

from app import deezer_client
from app.models import RESOURCE_RESPONSES
from app.responses import relay
from app.validation import isrc_code, resource_id

router = APIRouter(prefix="/track", tags=["Track"])


# Registered before /{id} so "isrc" is never read as an id
@router.get("/isrc/{isrc}", summary="Get track by ISRC", responses=RESOURCE_RESPONSES)
async def get_track_by_isrc(isrc: str = Depends(isrc_code)):
    return relay(await deezer_client.fetch(f"/track/isrc:{isrc}"))


@router.get("/{id}", summary="Get track by ID", responses=RESOURCE_RESPONSES)
async def get_track(track_id: int = Depends(resource_id)):
    """Retrieve detailed information about a specific track."""
    return relay(await deezer_client.fetch(f"/track/{track_id}"))
