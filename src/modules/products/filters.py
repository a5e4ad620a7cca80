"""Query-string parsing for the product listing.

``ProductFilter`` turns raw query parameters into a validated
``ProductQueryDTO``.  Type errors (``minPrice=abc``) are reported as a
``type-mismatch`` MalformedRequest, one entry per offending parameter;
bound and range errors come from ``validate_product_query``.  Filtering
itself is done by the specification the service builds from the DTO.
"""

from __future__ import annotations

from typing import Dict, List

import django_filters
from django import forms

from modules.core.exceptions import MalformedRequest, Violation
from modules.products.dtos import ProductQueryDTO
from modules.products.models import Product
from modules.products.validation import validate_product_query


class StrictBooleanField(forms.Field):
    """Boolean field that rejects anything it does not recognise.

    ``NullBooleanField`` silently maps unknown input to ``None``.
    """

    widget = forms.TextInput
    default_error_messages = {"invalid": "Enter a valid boolean."}

    TRUE_VALUES = {"true", "1", "yes", "on"}
    FALSE_VALUES = {"false", "0", "no", "off"}

    def to_python(self, value):
        if value in self.empty_values:
            return None
        text = str(value).strip().lower()
        if text in self.TRUE_VALUES:
            return True
        if text in self.FALSE_VALUES:
            return False
        raise forms.ValidationError(self.error_messages["invalid"], code="invalid")


class StrictBooleanFilter(django_filters.BooleanFilter):
    field_class = StrictBooleanField


class IntegerFilter(django_filters.NumberFilter):
    field_class = forms.IntegerField


class ProductFilter(django_filters.FilterSet):
    name = django_filters.CharFilter()
    minPrice = django_filters.NumberFilter()  # noqa: N815
    maxPrice = django_filters.NumberFilter()  # noqa: N815
    minQuantity = IntegerFilter()  # noqa: N815
    maxQuantity = IntegerFilter()  # noqa: N815
    includeOutOfStock = StrictBooleanFilter()  # noqa: N815

    # parameter -> expected type, as shown in type-mismatch messages
    EXPECTED_TYPES: Dict[str, str] = {
        "minPrice": "number",
        "maxPrice": "number",
        "minQuantity": "integer",
        "maxQuantity": "integer",
        "includeOutOfStock": "boolean",
    }

    class Meta:
        model = Product
        fields: List[str] = []

    def to_query(self) -> ProductQueryDTO:
        """Return the validated query.

        Raises:
            MalformedRequest: if any parameter failed type conversion.
            ProductValidationError: for out-of-bounds values or inverted ranges.
        """
        if not self.is_valid():
            violations = [
                Violation(
                    param,
                    "type.mismatch.field.message",
                    {"field": param, "expected": self.EXPECTED_TYPES.get(param, "value")},
                    invalid_value=self.data.get(param),
                )
                for param in self.errors
            ]
            raise MalformedRequest("type-mismatch", "Invalid filter parameters.", violations)

        data = self.form.cleaned_data
        return validate_product_query(
            {
                "name": data.get("name") or None,
                "minPrice": data.get("minPrice"),
                "maxPrice": data.get("maxPrice"),
                "minQuantity": data.get("minQuantity"),
                "maxQuantity": data.get("maxQuantity"),
                "includeOutOfStock": data.get("includeOutOfStock"),
            }
        )
