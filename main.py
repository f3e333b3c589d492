"""Deezer API Proxy: FastAPI entry point."""
import logging
import time
from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import deezer_client
from app.config import settings
from app.models import NotFoundResponse
from app.rate_limiter import RateLimiter, build_rate_limiter
from app.responses import error_response
from app.routers import album, artist, chart, editorial, episode, genre, playlist, podcast, radio, search, track
from app.validation import RequestValidationFailed, format_errors

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

RATE_LIMIT_HEADERS = ["X-RateLimit-Limit", "X-RateLimit-Remaining", "X-RateLimit-Reset", "Retry-After"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    deezer_client.init_client()  # sync, no await
    limiter: RateLimiter = app.state.rate_limiter
    limiter.start()
    logger.info(
        "Proxying %s, rate limit %d per %s",
        settings.deezer_api_base, limiter.limit, limiter.window,
    )

    yield

    await limiter.stop()
    await deezer_client.close_client()


if settings.is_development:
    _servers = [{"url": f"http://localhost:{settings.port}", "description": "Local development"}]
else:
    _servers = [{"url": settings.public_url, "description": "Production"}]

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="A proxy service for the Deezer API with rate limiting, CORS support, and OpenAPI documentation.",
    contact={"name": "API Support", "url": "https://github.com/mnestel/deezer-api"},
    license_info={"name": "MIT", "url": "https://opensource.org/licenses/MIT"},
    servers=_servers,
    lifespan=lifespan,
    openapi_url="/doc",
    docs_url="/ui",
    redoc_url=None,
    swagger_ui_oauth2_redirect_url=None,
)
app.state.rate_limiter = build_rate_limiter(settings)


# Middleware order, outermost first: request log → CORS → rate limiter.
# Starlette wraps the most recently added middleware around the others.

def _server_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    message = str(exc) if settings.is_development else "An unexpected error occurred"
    return error_response(500, "Internal Server Error", message)


@app.middleware("http")
async def rate_limit(request: Request, call_next):
    limiter: RateLimiter = request.app.state.rate_limiter
    decision = limiter.hit(limiter.identify(request.headers))
    if not decision.allowed:
        return JSONResponse(status_code=429, content=decision.body(), headers=decision.headers())
    try:
        response = await call_next(request)
    except Exception as exc:
        # Answered here so the 500 still passes back through CORS and the request log.
        response = _server_error(request, exc)
    for name, value in decision.headers().items():
        response.headers[name] = value
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    expose_headers=RATE_LIMIT_HEADERS,
    max_age=86400,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info("%s %s %d %.1fms", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


for _module in (search, track, album, artist, playlist, chart, radio, genre, editorial, episode, podcast):
    app.include_router(_module.router)


# ---------------------------------------------------------------------------
# Info + health
# ---------------------------------------------------------------------------

ENDPOINT_GROUPS = {
    "search": {
        "path": "/search",
        "params": ["q (required)", "order", "limit", "index", "strict"],
        "subRoutes": [f"/search/{kind}" for kind in search.SEARCH_TYPES],
        "example": "/search?q=daft+punk&limit=10",
    },
    "track": {"path": "/track/:id", "subRoutes": ["/track/isrc/:isrc"], "example": "/track/3135556"},
    "album": {"path": "/album/:id", "subRoutes": ["/album/:id/tracks"], "example": "/album/302127"},
    "artist": {"path": "/artist/:id", "subRoutes": ["/artist/:id/top", "/artist/:id/albums"], "example": "/artist/27"},
    "playlist": {
        "path": "/playlist/:id",
        "subRoutes": ["/playlist/:id/tracks", "/playlist/:id/fans"],
        "example": "/playlist/3155776842",
    },
    "chart": {
        "path": "/chart",
        "subRoutes": [f"/chart/{kind}" for kind in chart.CHART_KINDS],
        "example": "/chart/tracks?limit=10",
    },
    "radio": {
        "path": "/radio",
        "subRoutes": ["/radio/genres", "/radio/top", "/radio/lists", "/radio/:id", "/radio/:id/tracks"],
        "example": "/radio/top",
    },
    "genre": {
        "path": "/genre",
        "subRoutes": ["/genre/:id", "/genre/:id/artists", "/genre/:id/radios"],
        "example": "/genre/132",
    },
    "editorial": {
        "path": "/editorial",
        "subRoutes": ["/editorial/:id"] + [f"/editorial/:id/{s}" for s in editorial.EDITORIAL_SECTIONS],
        "example": "/editorial/0/charts",
    },
    "episode": {"path": "/episode/:id", "example": "/episode/526673645"},
    "podcast": {"path": "/podcast/:id", "subRoutes": ["/podcast/:id/episodes"], "example": "/podcast/1002552"},
}


@app.get("/", tags=["Info"], summary="API info")
async def root(request: Request):
    limiter: RateLimiter = request.app.state.rate_limiter
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "healthy",
        "documentation": {
            "openapi": app.openapi_url,
            "swagger": app.docs_url,
            "deezer": "https://developers.deezer.com/api",
        },
        "endpoints": ENDPOINT_GROUPS,
        "rateLimit": {
            "limit": limiter.limit,
            "window": limiter.window,
            "headers": RATE_LIMIT_HEADERS[:3],
        },
    }


@app.get("/health", tags=["Info"], summary="Health check")
async def health():
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------

def available_endpoints() -> list[str]:
    paths = [app.openapi_url, app.docs_url] + [
        path for path, operations in app.openapi()["paths"].items() if "get" in operations
    ]
    return [f"GET {path}" for path in paths]


@app.exception_handler(RequestValidationFailed)
async def validation_failed_handler(request: Request, exc: RequestValidationFailed):
    return error_response(400, "Validation Error", exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return error_response(400, "Validation Error", format_errors(exc.errors()))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, HTTPStatus(exc.status_code).phrase, str(exc.detail), headers=exc.headers)


@app.exception_handler(404)
async def not_found_handler(request: Request, exc: Exception):
    body = NotFoundResponse(
        error="Not Found",
        message="The requested endpoint does not exist",
        documentation=app.docs_url,
        availableEndpoints=available_endpoints(),
    )
    return JSONResponse(status_code=404, content=body.model_dump())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    return _server_error(request, exc)


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting server on http://localhost:%d (OpenAPI: /doc, Swagger UI: /ui)", settings.port)
    uvicorn.run("main:app", host="0.0.0.0", port=settings.port, reload=settings.is_development)
