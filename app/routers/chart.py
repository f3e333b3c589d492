"""Chart routes. Sub-charts read Deezer's global chart (id 0)."""
from fastapi import APIRouter, Depends

from app import deezer_client
from app.models import COLLECTION_RESPONSES
from app.responses import relay
from app.validation import PaginationQuery, pagination

router = APIRouter(prefix="/chart", tags=["Chart"])

CHART_KINDS = ("tracks", "albums", "artists", "playlists", "podcasts")


@router.get("", summary="Get all charts", responses=COLLECTION_RESPONSES)
async def get_chart(page: PaginationQuery = Depends(pagination)):
    return relay(await deezer_client.fetch("/chart", page.params()), resource=False)


def _add_chart(kind: str) -> None:
    async def chart_kind(page: PaginationQuery = Depends(pagination)):
        return relay(await deezer_client.fetch(f"/chart/0/{kind}", page.params()), resource=False)

    router.add_api_route(
        f"/{kind}",
        chart_kind,
        methods=["GET"],
        name=f"get_chart_{kind}",
        summary=f"Get top {kind}",
        responses=COLLECTION_RESPONSES,
    )


for _kind in CHART_KINDS:
    _add_chart(_kind)
