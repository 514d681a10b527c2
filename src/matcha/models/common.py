"""Common models and response schemas."""

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field, field_validator

T = TypeVar("T")


class PaginationRequest(BaseModel):
    """Pagination parameters as supplied by the caller.

    Values are unconstrained here: out-of-range page and limit
    values are clamped by ``calculate_pagination`` rather than rejected.
    """

    page: int | None = None
    limit: int | None = None
    sort: str | None = None
    order: Literal["asc", "desc"] | None = None

    @field_validator("order", mode="before")
    @classmethod
    def normalize_order(cls, v: Any) -> Any:
        """Accept ASC/DESC in any case."""
        if isinstance(v, str):
            return v.lower()
        return v

    def to_query_params(self) -> dict[str, str | int]:
        """Query parameters to carry into pagination links (everything but page)."""
        return self.model_dump(exclude={"page"}, exclude_none=True)


class PaginationParams(BaseModel):
    """Resolved offset/limit for a paginated query."""

    offset: int
    limit: int
    page: int


class PaginationMeta(BaseModel):
    """Pagination metadata."""

    total_items: int = Field(ge=0)
    total_pages: int = Field(ge=0)
    current_page: int
    per_page: int
    has_previous: bool
    has_next: bool


class PaginationLinks(BaseModel):
    """Navigation links for a paginated response."""

    first: str
    last: str
    previous: str | None = None
    next: str | None = None
    self: str


class PaginatedResponse(BaseModel, Generic[T]):
    """Paginated API response envelope."""

    data: list[T]
    meta: PaginationMeta
    links: PaginationLinks


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    success: bool = True
    data: T
    message: str | None = None


class ErrorResponse(BaseModel):
    """Error response."""

    success: bool = False
    error: str
    code: str | None = None
    details: dict[str, Any] | None = None
