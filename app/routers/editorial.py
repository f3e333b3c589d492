"""Editorial routes. Editorial 0 is "All"."""
from fastapi import APIRouter, Depends

from app import deezer_client
from app.models import COLLECTION_RESPONSES, RESOURCE_RESPONSES, SUBRESOURCE_RESPONSES
from app.responses import relay
from app.validation import PaginationQuery, pagination, resource_id

router = APIRouter(prefix="/editorial", tags=["Editorial"])

EDITORIAL_SECTIONS = ("selection", "charts", "releases")


@router.get("", summary="List editorials", responses=COLLECTION_RESPONSES)
async def list_editorials():
    return relay(await deezer_client.fetch("/editorial"), resource=False)


@router.get("/{id}", summary="Get editorial by ID", responses=RESOURCE_RESPONSES)
async def get_editorial(editorial_id: int = Depends(resource_id)):
    return relay(await deezer_client.fetch(f"/editorial/{editorial_id}"))


def _add_section(section: str) -> None:
    async def editorial_section(
        editorial_id: int = Depends(resource_id),
        page: PaginationQuery = Depends(pagination),
    ):
        return relay(await deezer_client.fetch(f"/editorial/{editorial_id}/{section}", page.params()))

    router.add_api_route(
        f"/{{id}}/{section}",
        editorial_section,
        methods=["GET"],
        name=f"get_editorial_{section}",
        summary=f"Get editorial {section}",
        responses=SUBRESOURCE_RESPONSES,
    )


for _section in EDITORIAL_SECTIONS:
    _add_section(_section)
