"""Unit tests for 0-based pagination and sort-parameter ordering."""

from __future__ import annotations

import pytest
from rest_framework.request import Request
from rest_framework.test import APIRequestFactory

from modules.core.exceptions import MalformedRequest
from modules.core.filters import SortOrderingFilter
from modules.core.pagination import Page, ZeroBasedPagination
from modules.products.models import Product

pytestmark = pytest.mark.unit


def _request(querystring: str = "") -> Request:
    return Request(APIRequestFactory().get(f"/api/v1/products/?{querystring}"))


def _paginate(items, querystring: str = ""):
    paginator = ZeroBasedPagination()
    content = paginator.paginate_queryset(items, _request(querystring))
    return paginator.build_page(content)


class _View:
    ordering_fields = [("public_id", "publicId"), ("name", "name"), ("price", "price")]
    ordering = ["id"]


def _ordering(querystring: str):
    return SortOrderingFilter().get_ordering(
        _request(querystring), Product.objects.all(), _View()
    )


# ===========================================================================
# ZeroBasedPagination
# ===========================================================================


class TestPageParameters:
    def test_defaults(self):
        page = _paginate(list(range(25)))
        assert page.number == 0
        assert page.size == 10
        assert page.content == list(range(10))

    def test_default_size_follows_setting(self, settings):
        settings.DEFAULT_PAGE_SIZE = 25
        assert _paginate(list(range(30))).size == 25

    def test_page_is_zero_based(self):
        assert _paginate(list(range(10)), "page=1&size=3").content == [3, 4, 5]

    @pytest.mark.parametrize("querystring", ["page=-1", "page=abc", "page=1.5"])
    def test_invalid_page(self, querystring):
        with pytest.raises(MalformedRequest) as exc_info:
            _paginate([], querystring)
        assert exc_info.value.problem == "invalid-argument"
        assert exc_info.value.violations[0].message_key == "pagination.page.invalid"

    @pytest.mark.parametrize("querystring", ["size=0", "size=101", "size=ten"])
    def test_invalid_size(self, querystring):
        with pytest.raises(MalformedRequest) as exc_info:
            _paginate([], querystring)
        violation = exc_info.value.violations[0]
        assert violation.message_key == "pagination.size.invalid"
        assert violation.params == {"max": 100}

    def test_max_size_accepted(self):
        assert _paginate([], "size=100").size == 100


class TestPageMetadata:
    def test_first_of_three(self):
        page = _paginate([1, 2, 3, 4, 5], "page=0&size=2")
        assert page.total_elements == 5
        assert page.total_pages == 3
        assert page.number_of_elements == 2
        assert page.first is True
        assert page.last is False
        assert page.has_next is True
        assert page.has_previous is False
        assert page.empty is False

    def test_last_partial_page(self):
        page = _paginate([1, 2, 3, 4, 5], "page=2&size=2")
        assert page.content == [5]
        assert page.last is True
        assert page.has_next is False
        assert page.has_previous is True

    def test_beyond_last_page(self):
        page = _paginate([1, 2, 3, 4, 5], "page=7&size=2")
        assert page.content == []
        assert page.empty is True
        assert page.last is True
        assert page.has_next is False
        assert page.total_elements == 5

    def test_no_results(self):
        page = _paginate([])
        assert page.total_pages == 0
        assert page.first is True
        assert page.last is True
        assert page.empty is True

    def test_paginated_response_uses_camel_case(self):
        paginator = ZeroBasedPagination()
        content = paginator.paginate_queryset([1], _request("size=1"))
        response = paginator.get_paginated_response(content)
        assert set(response.data) == {
            "content",
            "number",
            "size",
            "totalElements",
            "totalPages",
            "numberOfElements",
            "first",
            "last",
            "hasNext",
            "hasPrevious",
            "empty",
        }

    def test_page_model_is_plain_data(self):
        page = Page[int](
            content=[1],
            number=0,
            size=1,
            total_elements=1,
            total_pages=1,
            number_of_elements=1,
            first=True,
            last=True,
            has_next=False,
            has_previous=False,
            empty=False,
        )
        assert page.model_dump(by_alias=True)["totalElements"] == 1


# ===========================================================================
# SortOrderingFilter
# ===========================================================================


class TestSort:
    def test_default_ordering(self):
        assert _ordering("") == ["id"]

    def test_single_property_defaults_to_ascending(self):
        assert _ordering("sort=name") == ["name", "id"]

    def test_descending(self):
        assert _ordering("sort=price,desc") == ["-price", "id"]

    def test_direction_case_insensitive(self):
        assert _ordering("sort=price,DESC") == ["-price", "id"]

    def test_repeated_sort(self):
        assert _ordering("sort=price,desc&sort=name,asc") == ["-price", "name", "id"]

    def test_public_name_mapped_to_field(self):
        assert _ordering("sort=publicId") == ["public_id", "id"]

    def test_unknown_property_rejected(self):
        with pytest.raises(MalformedRequest) as exc_info:
            _ordering("sort=id")
        violation = exc_info.value.violations[0]
        assert exc_info.value.problem == "invalid-argument"
        assert violation.message_key == "pagination.sort.invalid"
        assert violation.params == {"value": "id", "allowed": "publicId, name, price"}

    def test_bad_direction_rejected(self):
        with pytest.raises(MalformedRequest) as exc_info:
            _ordering("sort=name,sideways")
        assert exc_info.value.violations[0].message_key == "pagination.direction.invalid"

    def test_filter_queryset_orders_in_the_database(self):
        queryset = SortOrderingFilter().filter_queryset(
            _request("sort=price,desc"), Product.objects.all(), _View()
        )
        assert queryset.query.order_by == ("-price", "id")
