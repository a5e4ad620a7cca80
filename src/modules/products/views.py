"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.  Views only
parse input and shape output: domain exceptions propagate untouched to
``modules.core.exception_handler``, which renders the problem document.
"""

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.reverse import reverse
from rest_framework.viewsets import GenericViewSet

from modules.core.filters import SortOrderingFilter
from modules.products.dtos import ProductOutputDTO
from modules.products.filters import ProductFilter
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import (
    ProblemSerializer,
    ProductPageSerializer,
    ProductRequestSerializer,
    ProductResponseSerializer,
)
from modules.products.services import ProductService

# (model field, public sort property)
SORTABLE_FIELDS = [
    ("public_id", "publicId"),
    ("name", "name"),
    ("price", "price"),
    ("quantity", "quantity"),
    ("description", "description"),
]

_LIST_PARAMETERS = [
    OpenApiParameter("name", OpenApiTypes.STR, description="Case-insensitive name substring"),
    OpenApiParameter("minPrice", OpenApiTypes.DECIMAL, description="Minimum price (inclusive)"),
    OpenApiParameter("maxPrice", OpenApiTypes.DECIMAL, description="Maximum price (inclusive)"),
    OpenApiParameter("minQuantity", OpenApiTypes.INT, description="Minimum quantity (inclusive)"),
    OpenApiParameter("maxQuantity", OpenApiTypes.INT, description="Maximum quantity (inclusive)"),
    OpenApiParameter(
        "includeOutOfStock",
        OpenApiTypes.BOOL,
        description="Include products with zero quantity (default true)",
    ),
    OpenApiParameter("page", OpenApiTypes.INT, description="0-based page index"),
    OpenApiParameter("size", OpenApiTypes.INT, description="Page size (1-100, default 10)"),
    OpenApiParameter(
        "sort",
        OpenApiTypes.STR,
        many=True,
        description="property[,asc|desc]; properties: "
        + ", ".join(label for _, label in SORTABLE_FIELDS),
    ),
]

_PROBLEM = OpenApiResponse(ProblemSerializer, description="Problem document")


class ProductViewSet(GenericViewSet):
    """ViewSet for Product CRUD operations.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    Products are addressed by ``publicId`` only; PATCH is not offered,
    PUT replaces every mutable field.
    """

    queryset = Product.objects.all()
    lookup_field = "public_id"
    lookup_value_regex = "[^/]+"
    http_method_names = ["get", "post", "put", "delete", "head", "options"]
    ordering_fields = SORTABLE_FIELDS
    ordering = ["id"]
    filter_backends = [SortOrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    @extend_schema(
        parameters=_LIST_PARAMETERS,
        responses={200: ProductPageSerializer, 400: _PROBLEM},
    )
    def list(self, request: Request) -> Response:
        """GET /api/v1/products/"""
        query = ProductFilter(
            data=request.query_params, queryset=Product.objects.none()
        ).to_query()
        queryset = self.filter_queryset(self._service.list_products(query))
        page = self.paginate_queryset(queryset)
        return self.get_paginated_response(
            [ProductOutputDTO.from_entity(product).to_wire() for product in page]
        )

    @extend_schema(responses={200: ProductResponseSerializer, 404: _PROBLEM})
    def retrieve(self, request: Request, public_id: str) -> Response:
        """GET /api/v1/products/{publicId}/"""
        product = self._service.get_product(public_id)
        return Response(product.to_wire())

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    @extend_schema(
        request=ProductRequestSerializer,
        responses={201: ProductResponseSerializer, 400: _PROBLEM, 409: _PROBLEM},
    )
    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        product = self._service.create_product(request.data)
        location = reverse(
            "product-detail", kwargs={"public_id": product.public_id}, request=request
        )
        return Response(
            product.to_wire(),
            status=status.HTTP_201_CREATED,
            headers={"Location": location},
        )

    @extend_schema(
        request=ProductRequestSerializer,
        responses={
            200: ProductResponseSerializer,
            400: _PROBLEM,
            404: _PROBLEM,
            409: _PROBLEM,
        },
    )
    def update(self, request: Request, public_id: str) -> Response:
        """PUT /api/v1/products/{publicId}/"""
        product = self._service.update_product(public_id, request.data)
        return Response(product.to_wire())

    @extend_schema(responses={204: None})
    def destroy(self, request: Request, public_id: str) -> Response:
        """DELETE /api/v1/products/{publicId}/

        Always 204: whether the product existed is not disclosed.
        """
        self._service.delete_product(public_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
