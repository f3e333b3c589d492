"""Request parameter validation: pydantic models plus FastAPI dependencies.

Handlers never see raw strings. Each dependency runs ``validate`` on the
raw path/query values and raises ``RequestValidationFailed`` (rendered as a
400 by the app) when they don't fit.
"""
import re
from enum import Enum
from typing import Any, Iterable, NamedTuple

from fastapi import Path, Query
from pydantic import BaseModel, ValidationError, field_validator

MAX_PAGE_SIZE = 100
MAX_QUERY_LENGTH = 500

_DIGITS = re.compile(r"[0-9]+")
_ISRC = re.compile(r"[A-Z]{2}[A-Z0-9]{3}[0-9]{7}")

# Location prefixes FastAPI adds to its own validation errors
_LOC_SOURCES = {"path", "query", "header", "cookie", "body"}


class RequestValidationFailed(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationResult(NamedTuple):
    success: bool
    data: Any = None
    error: str | None = None


class SearchOrder(str, Enum):
    RANKING = "RANKING"
    TRACK_ASC = "TRACK_ASC"
    TRACK_DESC = "TRACK_DESC"
    ARTIST_ASC = "ARTIST_ASC"
    ARTIST_DESC = "ARTIST_DESC"
    ALBUM_ASC = "ALBUM_ASC"
    ALBUM_DESC = "ALBUM_DESC"
    RATING_ASC = "RATING_ASC"
    RATING_DESC = "RATING_DESC"
    DURATION_ASC = "DURATION_ASC"
    DURATION_DESC = "DURATION_DESC"


def _non_negative_int(value: Any, message: str) -> int:
    if isinstance(value, bool):
        raise ValueError(message)
    if isinstance(value, int):
        if value < 0:
            raise ValueError(message)
        return value
    if isinstance(value, str) and _DIGITS.fullmatch(value):
        return int(value)
    raise ValueError(message)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class IdParams(BaseModel):
    id: int

    @field_validator("id", mode="before")
    @classmethod
    def _check_id(cls, v: Any) -> int:
        # Deezer uses id 0 for some collections (editorial "All", chart "All")
        return _non_negative_int(v, "ID must be a non-negative integer")


class IsrcParams(BaseModel):
    isrc: str

    @field_validator("isrc", mode="before")
    @classmethod
    def _check_isrc(cls, v: Any) -> str:
        if not isinstance(v, str) or not _ISRC.fullmatch(v):
            raise ValueError("Invalid ISRC format")
        return v


class PaginationQuery(BaseModel):
    limit: int | None = None
    index: int | None = None

    @field_validator("limit", mode="before")
    @classmethod
    def _check_limit(cls, v: Any) -> int | None:
        if v is None or v == "":
            return None
        message = f"Limit must be between 1 and {MAX_PAGE_SIZE}"
        n = _non_negative_int(v, message)
        if not 1 <= n <= MAX_PAGE_SIZE:
            raise ValueError(message)
        return n

    @field_validator("index", mode="before")
    @classmethod
    def _check_index(cls, v: Any) -> int | None:
        if v is None or v == "":
            return None
        return _non_negative_int(v, "Index must be 0 or greater")

    def params(self) -> dict[str, Any]:
        return {"limit": self.limit, "index": self.index}


class SimpleSearchQuery(PaginationQuery):
    q: str
    order: SearchOrder | None = None

    @field_validator("q", mode="before")
    @classmethod
    def _check_q(cls, v: Any) -> str:
        if v is None:
            raise ValueError('Query parameter "q" is required')
        if not isinstance(v, str):
            raise ValueError("Query must be a string")
        if not v:
            raise ValueError("Query cannot be empty")
        if len(v) > MAX_QUERY_LENGTH:
            raise ValueError(f"Query too long (max {MAX_QUERY_LENGTH} characters)")
        return v

    @field_validator("order", mode="before")
    @classmethod
    def _check_order(cls, v: Any) -> SearchOrder | None:
        if v is None or v == "":
            return None
        try:
            return SearchOrder(v)
        except ValueError:
            raise ValueError(f"Order must be one of: {', '.join(o.value for o in SearchOrder)}") from None

    def params(self) -> dict[str, Any]:
        return {"q": self.q, "order": self.order.value if self.order else None, **super().params()}


class SearchQuery(SimpleSearchQuery):
    strict: str | None = None

    @field_validator("strict", mode="before")
    @classmethod
    def _check_strict(cls, v: Any) -> str | None:
        if v is None or v == "":
            return None
        if v not in ("on", "off"):
            raise ValueError("Strict must be 'on' or 'off'")
        return v

    def params(self) -> dict[str, Any]:
        return {**super().params(), "strict": self.strict}


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def format_errors(errors: Iterable[dict]) -> str:
    """Join pydantic error dicts into ``"field: message; field: message"``."""
    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ())]
        if loc and loc[0] in _LOC_SOURCES:
            loc = loc[1:]
        if err.get("type") == "value_error" and "error" in err.get("ctx", {}):
            message = str(err["ctx"]["error"])
        else:
            message = err.get("msg", "Invalid value")
        path = ".".join(loc)
        parts.append(f"{path}: {message}" if path else message)
    return "; ".join(parts)


def validate(model: type[BaseModel], raw: Any) -> ValidationResult:
    try:
        return ValidationResult(True, model.model_validate(raw))
    except ValidationError as exc:
        return ValidationResult(False, error=format_errors(exc.errors()))


def _validated(model: type[BaseModel], raw: Any) -> Any:
    result = validate(model, raw)
    if not result.success:
        raise RequestValidationFailed(result.error)
    return result.data


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------

def resource_id(
    id: str = Path(description="Resource ID", examples=["3135556"]),
) -> int:
    return _validated(IdParams, {"id": id}).id


def isrc_code(
    isrc: str = Path(description="International Standard Recording Code (12 characters)", examples=["USUM71703861"]),
) -> str:
    return _validated(IsrcParams, {"isrc": isrc}).isrc


def pagination(
    limit: str | None = Query(None, description=f"Number of results (1-{MAX_PAGE_SIZE})", examples=["25"]),
    index: str | None = Query(None, description="Starting offset for pagination", examples=["0"]),
) -> PaginationQuery:
    return _validated(PaginationQuery, {"limit": limit, "index": index})


_ORDER_DOC = "Sort order: " + ", ".join(o.value for o in SearchOrder)


def simple_search_query(
    q: str | None = Query(None, description="Search query", examples=["daft punk"]),
    order: str | None = Query(None, description=_ORDER_DOC, examples=["RANKING"]),
    limit: str | None = Query(None, description=f"Number of results (1-{MAX_PAGE_SIZE})", examples=["25"]),
    index: str | None = Query(None, description="Starting offset", examples=["0"]),
) -> SimpleSearchQuery:
    return _validated(SimpleSearchQuery, {"q": q, "order": order, "limit": limit, "index": index})


def search_query(
    q: str | None = Query(None, description="Search query", examples=["daft punk"]),
    order: str | None = Query(None, description=_ORDER_DOC, examples=["RANKING"]),
    strict: str | None = Query(None, description="Enable strict search mode (on/off)", examples=["off"]),
    limit: str | None = Query(None, description=f"Number of results (1-{MAX_PAGE_SIZE})", examples=["25"]),
    index: str | None = Query(None, description="Starting offset", examples=["0"]),
) -> SearchQuery:
    return _validated(
        SearchQuery,
        {"q": q, "order": order, "strict": strict, "limit": limit, "index": index},
    )
