"""Album routes."""
from fastapi import APIRouter, Depends

from app import deezer_client
from app.models import RESOURCE_RESPONSES, SUBRESOURCE_RESPONSES
from app.responses import relay
from app.validation import PaginationQuery, pagination, resource_id

router = APIRouter(prefix="/album", tags=["Album"])


@router.get("/{id}", summary="Get album by ID", responses=RESOURCE_RESPONSES)
async def get_album(album_id: int = Depends(resource_id)):
    return relay(await deezer_client.fetch(f"/album/{album_id}"))


@router.get("/{id}/tracks", summary="Get album tracks", responses=SUBRESOURCE_RESPONSES)
async def get_album_tracks(
    album_id: int = Depends(resource_id),
    page: PaginationQuery = Depends(pagination),
):
    return relay(await deezer_client.fetch(f"/album/{album_id}/tracks", page.params()))
