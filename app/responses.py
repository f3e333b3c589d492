"""Turn upstream results and local failures into JSON responses."""
from fastapi.responses import JSONResponse

from app.deezer_client import UpstreamResult


def error_response(status_code: int, error: str, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "message": message}, headers=headers)


def relay(result: UpstreamResult, *, resource: bool = True) -> JSONResponse:
    """Relay an upstream result verbatim, or map its error.

    ``resource`` handlers (one object or its children) label a 404 as
    "Not Found"; collection and search handlers always say "Upstream Error".
    """
    if result.error:
        label = "Not Found" if resource and result.status == 404 else "Upstream Error"
        return error_response(result.status, label, result.error)
    return JSONResponse(content=result.data)
