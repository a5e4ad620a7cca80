"""0-based page-number pagination.

``ZeroBasedPagination`` is DRF's ``PageNumberPagination`` speaking the
``page`` (0-based) / ``size`` query parameters.  Django's ``Paginator`` does
the counting; out-of-range values are rejected instead of being clamped, and
a page past the end is simply empty.  Responses are rendered through the
camelCase ``Page`` model.
"""

from __future__ import annotations

from typing import Any, Generic, List, Optional, TypeVar

from django.conf import settings
from django.core.paginator import Paginator as DjangoPaginator
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from modules.core.exceptions import MalformedRequest, Violation

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of results plus navigation metadata (camelCase on the wire)."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    content: List[T]
    number: int
    size: int
    total_elements: int
    total_pages: int
    number_of_elements: int
    first: bool
    last: bool
    has_next: bool
    has_previous: bool
    empty: bool


def _parse_int(raw: str, field: str, message_key: str, minimum: int, maximum: Optional[int] = None, **params) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        value = None
    if value is None or value < minimum or (maximum is not None and value > maximum):
        raise MalformedRequest(
            "invalid-argument",
            f"Invalid {field}: {raw!r}",
            violations=[Violation(field, message_key, params, invalid_value=raw)],
        )
    return value


class ZeroBasedPagination(PageNumberPagination):
    page_query_param = "page"
    page_size_query_param = "size"
    django_paginator_class = DjangoPaginator

    def __init__(self) -> None:
        self.page_size = settings.DEFAULT_PAGE_SIZE
        self.max_page_size = settings.MAX_PAGE_SIZE

    def get_page_size(self, request) -> int:
        raw = request.query_params.get(self.page_size_query_param)
        if raw in (None, ""):
            return self.page_size
        return _parse_int(
            raw,
            "size",
            "pagination.size.invalid",
            1,
            self.max_page_size,
            max=self.max_page_size,
        )

    def get_page_index(self, request) -> int:
        raw = request.query_params.get(self.page_query_param)
        if raw in (None, ""):
            return 0
        return _parse_int(raw, "page", "pagination.page.invalid", 0)

    def paginate_queryset(self, queryset, request, view=None) -> List[Any]:
        """Return the rows of the requested page.

        Raises:
            MalformedRequest: for a negative or non-numeric page, or a size
                outside ``1..MAX_PAGE_SIZE``.
        """
        self.request = request
        self.size = self.get_page_size(request)
        self.page_index = self.get_page_index(request)
        # No phantom first page: an empty result has zero pages
        self.paginator = self.django_paginator_class(
            queryset, self.size, allow_empty_first_page=False
        )
        if self.page_index < self.paginator.num_pages:
            self.page = self.paginator.page(self.page_index + 1)
            return list(self.page)
        self.page = None
        return []

    def get_paginated_response(self, data) -> Response:
        return Response(self.build_page(data).model_dump(mode="json", by_alias=True))

    def build_page(self, data: List[Any]) -> Page:
        page = self.page
        return Page(
            content=data,
            number=self.page_index,
            size=self.size,
            total_elements=self.paginator.count,
            total_pages=self.paginator.num_pages,
            number_of_elements=len(data),
            first=self.page_index == 0,
            last=page is None or not page.has_next(),
            has_next=page is not None and page.has_next(),
            has_previous=self.page_index > 0,
            empty=not data,
        )
