"""Pagination math and envelope assembly shared by every list endpoint."""

from collections.abc import Mapping, Sequence
from math import ceil
from typing import Any, TypeVar
from urllib.parse import urlencode

from ..models.common import (
    PaginatedResponse,
    PaginationLinks,
    PaginationMeta,
    PaginationParams,
    PaginationRequest,
)

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
DEFAULT_ORDER = "desc"


def calculate_pagination(request: PaginationRequest) -> PaginationParams:
    """Resolve page/limit/offset from a request, clamping out-of-range values."""
    page = max(1, request.page if request.page is not None else DEFAULT_PAGE)
    limit = request.limit if request.limit is not None else DEFAULT_LIMIT
    limit = min(max(1, limit), MAX_LIMIT)
    return PaginationParams(offset=(page - 1) * limit, limit=limit, page=page)


def build_pagination_meta(total_items: int, page: int, limit: int) -> PaginationMeta:
    """Build pagination metadata.

    ``has_next``/``has_previous`` follow from the arithmetic alone, so a page
    past the end still yields valid metadata. ``page`` and ``limit`` are
    reported as given; a non-positive limit yields no pages.
    """
    total_pages = ceil(total_items / limit) if total_items > 0 and limit > 0 else 0
    return PaginationMeta(
        total_items=total_items,
        total_pages=total_pages,
        current_page=page,
        per_page=limit,
        has_previous=page > 1,
        has_next=page < total_pages,
    )


def _page_url(base_url: str, page: int, query_params: Mapping[str, Any]) -> str:
    params = [(key, value) for key, value in query_params.items() if key != "page"]
    params.append(("page", page))
    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}{urlencode(params, doseq=True)}"


def build_pagination_links(
    base_url: str,
    page: int,
    total_pages: int,
    query_params: Mapping[str, Any] | None = None,
) -> PaginationLinks:
    """Build first/last/previous/next/self links.

    Every caller-supplied parameter except ``page`` is reproduced in each link.
    """
    query_params = query_params or {}
    return PaginationLinks(
        first=_page_url(base_url, 1, query_params),
        last=_page_url(base_url, total_pages, query_params),
        previous=_page_url(base_url, page - 1, query_params) if page > 1 else None,
        next=_page_url(base_url, page + 1, query_params) if page < total_pages else None,
        self=_page_url(base_url, page, query_params),
    )


def create_paginated_response(
    data: Sequence[T],
    total_items: int,
    page: int,
    limit: int,
    base_url: str,
    query_params: Mapping[str, Any] | None = None,
) -> PaginatedResponse[T]:
    """Assemble the ``{data, meta, links}`` envelope."""
    meta = build_pagination_meta(total_items, page, limit)
    links = build_pagination_links(base_url, page, meta.total_pages, query_params)
    return PaginatedResponse[Any](data=list(data), meta=meta, links=links)
