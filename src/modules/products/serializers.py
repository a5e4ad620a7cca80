"""Product DRF serializers describing the wire format.

Request validation and response building live in the service layer
(``validation.py`` / ``dtos.py``); these serializers document the
request, response and error shapes for the OpenAPI schema.
"""

from __future__ import annotations

from decimal import Decimal

from drf_spectacular.utils import extend_schema_serializer
from rest_framework import serializers


class ProductRequestSerializer(serializers.Serializer):
    """Body of ``POST`` and ``PUT`` requests."""

    name = serializers.CharField(min_length=3, max_length=100)
    price = serializers.DecimalField(
        max_digits=8, decimal_places=2, min_value=Decimal("0.01"), max_value=Decimal("999999.99")
    )
    description = serializers.CharField(
        max_length=500, required=False, allow_null=True, allow_blank=True
    )
    quantity = serializers.IntegerField(min_value=0, max_value=999999)


class ProductResponseSerializer(serializers.Serializer):
    """A product as returned to clients."""

    publicId = serializers.CharField(read_only=True)  # noqa: N815
    name = serializers.CharField(read_only=True)
    price = serializers.DecimalField(max_digits=8, decimal_places=2, read_only=True)
    description = serializers.CharField(read_only=True, allow_null=True)
    quantity = serializers.IntegerField(read_only=True)


@extend_schema_serializer(many=False)
class ProductPageSerializer(serializers.Serializer):
    """A page of products with navigation metadata."""

    content = ProductResponseSerializer(many=True, read_only=True)
    number = serializers.IntegerField(read_only=True)
    size = serializers.IntegerField(read_only=True)
    totalElements = serializers.IntegerField(read_only=True)  # noqa: N815
    totalPages = serializers.IntegerField(read_only=True)  # noqa: N815
    numberOfElements = serializers.IntegerField(read_only=True)  # noqa: N815
    first = serializers.BooleanField(read_only=True)
    last = serializers.BooleanField(read_only=True)
    hasNext = serializers.BooleanField(read_only=True)  # noqa: N815
    hasPrevious = serializers.BooleanField(read_only=True)  # noqa: N815
    empty = serializers.BooleanField(read_only=True)


class ProblemErrorSerializer(serializers.Serializer):
    field = serializers.CharField(read_only=True)
    message = serializers.CharField(read_only=True)
    invalidValue = serializers.CharField(read_only=True, required=False)  # noqa: N815


class ProblemSerializer(serializers.Serializer):
    """RFC 7807 problem document returned for every 4xx/5xx response."""

    type = serializers.CharField(read_only=True)
    title = serializers.CharField(read_only=True)
    status = serializers.IntegerField(read_only=True)
    detail = serializers.CharField(read_only=True)
    instance = serializers.CharField(read_only=True)
    errors = ProblemErrorSerializer(many=True, read_only=True, required=False)
    productId = serializers.CharField(read_only=True, required=False)  # noqa: N815
    productName = serializers.CharField(read_only=True, required=False)  # noqa: N815
