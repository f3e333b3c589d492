"""Pydantic response models (used for OpenAPI documentation)."""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    error: str = Field(examples=["Validation Error"])
    message: str


class RateLimitErrorResponse(ErrorResponse):
    retryAfter: int = Field(ge=0, description="Seconds until the window resets")
    limit: int
    window: str = Field(examples=["1 minute"])


class NotFoundResponse(ErrorResponse):
    documentation: str
    availableEndpoints: list[str]


class DeezerPage(BaseModel):
    """Deezer list envelope; all other upstream fields pass through untouched."""
    model_config = ConfigDict(extra="allow")

    data: list[Any] | None = None
    total: int | None = None
    next: str | None = None
    prev: str | None = None


class DeezerObject(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    type: str | None = None


# Shared ``responses=`` maps for route decorators
COLLECTION_RESPONSES: dict[int | str, dict[str, Any]] = {
    200: {"model": DeezerPage, "description": "Upstream result"},
    400: {"model": ErrorResponse, "description": "Validation error"},
    429: {"model": RateLimitErrorResponse, "description": "Rate limit exceeded"},
    502: {"model": ErrorResponse, "description": "Upstream error from Deezer API"},
}

RESOURCE_RESPONSES: dict[int | str, dict[str, Any]] = {
    **COLLECTION_RESPONSES,
    200: {"model": DeezerObject, "description": "Upstream object"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
}

SUBRESOURCE_RESPONSES: dict[int | str, dict[str, Any]] = {
    **COLLECTION_RESPONSES,
    404: {"model": ErrorResponse, "description": "Resource not found"},
}
