"""Radio routes."""
from fastapi import APIRouter, Depends

from app import deezer_client
from app.models import COLLECTION_RESPONSES, RESOURCE_RESPONSES, SUBRESOURCE_RESPONSES
from app.responses import relay
from app.validation import PaginationQuery, pagination, resource_id

router = APIRouter(prefix="/radio", tags=["Radio"])


@router.get("", summary="List radio stations", responses=COLLECTION_RESPONSES)
async def list_radios():
    return relay(await deezer_client.fetch("/radio"), resource=False)


@router.get("/genres", summary="Radio stations by genre", responses=COLLECTION_RESPONSES)
async def radio_genres():
    return relay(await deezer_client.fetch("/radio/genres"), resource=False)


@router.get("/top", summary="Top radio stations", responses=COLLECTION_RESPONSES)
async def radio_top(page: PaginationQuery = Depends(pagination)):
    return relay(await deezer_client.fetch("/radio/top", page.params()), resource=False)


@router.get("/lists", summary="Radio lists", responses=COLLECTION_RESPONSES)
async def radio_lists():
    return relay(await deezer_client.fetch("/radio/lists"), resource=False)


@router.get("/{id}", summary="Get radio by ID", responses=RESOURCE_RESPONSES)
async def get_radio(radio_id: int = Depends(resource_id)):
    return relay(await deezer_client.fetch(f"/radio/{radio_id}"))


@router.get("/{id}/tracks", summary="Get radio tracks", responses=SUBRESOURCE_RESPONSES)
async def get_radio_tracks(
    radio_id: int = Depends(resource_id),
    page: PaginationQuery = Depends(pagination),
):
    return relay(await deezer_client.fetch(f"/radio/{radio_id}/tracks", page.params()))
