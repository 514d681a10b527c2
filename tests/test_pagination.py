"""Tests for pagination math and link building."""

import pytest

from matcha.core.pagination import (
    build_pagination_links,
    build_pagination_meta,
    calculate_pagination,
    create_paginated_response,
)
from matcha.models.common import PaginationRequest


class TestCalculatePagination:
    """Tests for page/limit/offset resolution."""

    def test_defaults(self):
        params = calculate_pagination(PaginationRequest())
        assert (params.page, params.limit, params.offset) == (1, 10, 0)

    def test_offset_follows_page_and_limit(self):
        params = calculate_pagination(PaginationRequest(page=3, limit=20))
        assert params.offset == 40

    @pytest.mark.parametrize(
        ("limit", "expected"),
        [(500, 100), (100, 100), (0, 1), (-5, 1), (1, 1)],
    )
    def test_limit_is_clamped(self, limit, expected):
        assert calculate_pagination(PaginationRequest(limit=limit)).limit == expected

    @pytest.mark.parametrize("page", [0, -3])
    def test_page_below_one_is_clamped(self, page):
        params = calculate_pagination(PaginationRequest(page=page, limit=10))
        assert params.page == 1
        assert params.offset == 0


class TestBuildPaginationMeta:
    """Tests for pagination metadata."""

    def test_partial_last_page(self):
        meta = build_pagination_meta(total_items=25, page=3, limit=10)
        assert meta.total_pages == 3
        assert meta.has_previous is True
        assert meta.has_next is False

    def test_empty_result(self):
        meta = build_pagination_meta(total_items=0, page=1, limit=10)
        assert meta.total_pages == 0
        assert meta.has_previous is False
        assert meta.has_next is False

    def test_page_past_the_end(self):
        meta = build_pagination_meta(total_items=5, page=4, limit=10)
        assert meta.total_pages == 1
        assert meta.current_page == 4
        assert meta.has_next is False
        assert meta.has_previous is True

    def test_values_outside_request_bounds_are_reported_as_given(self):
        meta = build_pagination_meta(total_items=40, page=0, limit=500)
        assert meta.current_page == 0
        assert meta.per_page == 500
        assert meta.total_pages == 1
        assert meta.has_previous is False
        assert meta.has_next is True

    def test_zero_limit_yields_no_pages(self):
        meta = build_pagination_meta(total_items=40, page=1, limit=0)
        assert meta.total_pages == 0
        assert meta.has_next is False


class TestBuildPaginationLinks:
    """Tests for navigation links."""

    def test_middle_page_links(self):
        links = build_pagination_links("https://api.test/users", 2, 5, {"limit": 10})
        assert links.first == "https://api.test/users?limit=10&page=1"
        assert links.last == "https://api.test/users?limit=10&page=5"
        assert links.previous == "https://api.test/users?limit=10&page=1"
        assert links.next == "https://api.test/users?limit=10&page=3"
        assert links.self == "https://api.test/users?limit=10&page=2"

    def test_sort_and_order_carried_by_every_link(self):
        links = build_pagination_links("https://api.test/users", 2, 3, {"sort": "name", "order": "asc"})
        assert links.first == "https://api.test/users?sort=name&order=asc&page=1"
        assert links.last == "https://api.test/users?sort=name&order=asc&page=3"
        assert links.previous == "https://api.test/users?sort=name&order=asc&page=1"
        assert links.next == "https://api.test/users?sort=name&order=asc&page=3"
        assert links.self == "https://api.test/users?sort=name&order=asc&page=2"

    def test_first_page_has_no_previous(self):
        links = build_pagination_links("https://api.test/users", 1, 3)
        assert links.previous is None
        assert links.next == "https://api.test/users?page=2"

    def test_last_page_has_no_next(self):
        links = build_pagination_links("https://api.test/users", 3, 3)
        assert links.next is None

    def test_page_param_from_caller_is_replaced(self):
        links = build_pagination_links("https://api.test/users", 2, 3, {"page": 9, "sort": "age"})
        assert links.self == "https://api.test/users?sort=age&page=2"

    def test_values_are_url_encoded(self):
        links = build_pagination_links("https://api.test/hashtags", 1, 1, {"name": "rock & roll"})
        assert links.self == "https://api.test/hashtags?name=rock+%26+roll&page=1"

    def test_empty_result_points_last_at_page_zero(self):
        links = build_pagination_links("https://api.test/users", 1, 0)
        assert links.last == "https://api.test/users?page=0"
        assert links.next is None


class TestCreatePaginatedResponse:
    """Tests for the response envelope."""

    def test_envelope(self):
        response = create_paginated_response(
            [{"id": 1}, {"id": 2}], 12, 2, 2, "https://api.test/items", {"limit": 2}
        )
        assert response.data == [{"id": 1}, {"id": 2}]
        assert response.meta.total_items == 12
        assert response.meta.total_pages == 6
        assert response.links.next == "https://api.test/items?limit=2&page=3"
