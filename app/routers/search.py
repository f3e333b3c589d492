"""Search routes: full catalog search plus per-type searches."""
from fastapi import APIRouter, Depends

from app import deezer_client
from app.models import COLLECTION_RESPONSES
from app.responses import relay
from app.validation import SearchQuery, SimpleSearchQuery, search_query, simple_search_query

router = APIRouter(prefix="/search", tags=["Search"])

# type -> what the docs call it
SEARCH_TYPES: dict[str, str] = {
    "track": "tracks",
    "album": "albums",
    "artist": "artists",
    "playlist": "playlists",
    "podcast": "podcasts",
    "radio": "radio stations",
    "user": "users",
}


@router.get("", summary="Search all content", responses=COLLECTION_RESPONSES)
async def search(query: SearchQuery = Depends(search_query)):
    """Search for tracks, albums, artists, and more."""
    result = await deezer_client.fetch("/search", query.params())
    return relay(result, resource=False)


def _add_typed_search(kind: str, label: str) -> None:
    async def typed_search(query: SimpleSearchQuery = Depends(simple_search_query)):
        result = await deezer_client.fetch(f"/search/{kind}", query.params())
        return relay(result, resource=False)

    router.add_api_route(
        f"/{kind}",
        typed_search,
        methods=["GET"],
        name=f"search_{kind}",
        summary=f"Search {label}",
        description=f"Search specifically for {label}",
        responses=COLLECTION_RESPONSES,
    )


for _kind, _label in SEARCH_TYPES.items():
    _add_typed_search(_kind, _label)
