"""Genre routes."""
from fastapi import APIRouter, Depends

from app import deezer_client
from app.models import COLLECTION_RESPONSES, RESOURCE_RESPONSES, SUBRESOURCE_RESPONSES
from app.responses import relay
from app.validation import PaginationQuery, pagination, resource_id

router = APIRouter(prefix="/genre", tags=["Genre"])


@router.get("", summary="List genres", responses=COLLECTION_RESPONSES)
async def list_genres():
    return relay(await deezer_client.fetch("/genre"), resource=False)


@router.get("/{id}", summary="Get genre by ID", responses=RESOURCE_RESPONSES)
async def get_genre(genre_id: int = Depends(resource_id)):
    return relay(await deezer_client.fetch(f"/genre/{genre_id}"))


@router.get("/{id}/artists", summary="Get genre artists", responses=SUBRESOURCE_RESPONSES)
async def get_genre_artists(
    genre_id: int = Depends(resource_id),
    page: PaginationQuery = Depends(pagination),
):
    return relay(await deezer_client.fetch(f"/genre/{genre_id}/artists", page.params()))


@router.get("/{id}/radios", summary="Get genre radios", responses=SUBRESOURCE_RESPONSES)
async def get_genre_radios(
    genre_id: int = Depends(resource_id),
    page: PaginationQuery = Depends(pagination),
):
    return relay(await deezer_client.fetch(f"/genre/{genre_id}/radios", page.params()))
