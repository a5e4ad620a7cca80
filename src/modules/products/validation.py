"""Validation entry points for product requests and filter queries.

The rules themselves are declared on the DTOs (``modules.products.dtos``).
This module runs them and turns pydantic's ``ValidationError`` into
``Violation`` objects carrying catalog message keys: field errors first,
request-level errors (business rules, ranges) after them.

The stock-level rules are still reported when some other field fails, as
long as ``price`` and ``quantity`` are both valid.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Type

import structlog
from pydantic import BaseModel, ValidationError

from modules.core.exceptions import MalformedRequest, Violation
from modules.products.dtos import (
    NAME_MIN_LENGTH,
    PRICE_SCALE,
    QUANTITY_MIN,
    QUERY_NAME_MAX_LENGTH,
    QUERY_NAME_MIN_LENGTH,
    ProductQueryDTO,
    ProductRequestDTO,
    StockLevel,
)
from modules.products.exceptions import ProductValidationError
from modules.products.models import (
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PRICE_MAX,
    PRICE_MIN,
    QUANTITY_MAX,
)

logger = structlog.get_logger(__name__)

REQUEST_SCOPE = "product"
QUERY_SCOPE = "productQuery"

# pydantic error type -> message key suffix
ERROR_SUFFIXES = {
    "missing": "required",
    "required": "required",
    "string_too_short": "size",
    "string_too_long": "size",
    "greater_than_equal": "min",
    "less_than_equal": "max",
    "decimal_max_places": "scale",
}

_NO_INPUT = {"missing", "required"}

# message key -> template parameters
MESSAGE_PARAMS: Dict[str, Dict[str, Any]] = {
    "validation.name.size": {"min": NAME_MIN_LENGTH, "max": NAME_MAX_LENGTH},
    "validation.price.min": {"min": PRICE_MIN},
    "validation.price.max": {"max": PRICE_MAX},
    "validation.price.scale": {"scale": PRICE_SCALE},
    "validation.description.size": {"max": DESCRIPTION_MAX_LENGTH},
    "validation.quantity.min": {"min": QUANTITY_MIN},
    "validation.quantity.max": {"max": QUANTITY_MAX},
    "productquery.name.size": {"min": QUERY_NAME_MIN_LENGTH, "max": QUERY_NAME_MAX_LENGTH},
    "productquery.price.min": {"min": PRICE_MIN},
    "productquery.price.max": {"max": PRICE_MAX},
    "productquery.quantity.min": {"min": QUANTITY_MIN},
    "productquery.quantity.max": {"max": QUANTITY_MAX},
}

# query parameter -> message key prefix
QUERY_KEY_PREFIXES = {
    "name": "productquery.name",
    "minPrice": "productquery.price",
    "maxPrice": "productquery.price",
    "minQuantity": "productquery.quantity",
    "maxQuantity": "productquery.quantity",
}


def _wire_name(model: Type[BaseModel], loc: str) -> str:
    field = model.model_fields.get(loc)
    if field is None or field.alias is None:
        return loc
    return field.alias


def _field_violation(field: str, key_prefix: str, error: Mapping[str, Any]) -> Violation:
    key = f"{key_prefix}.{ERROR_SUFFIXES.get(error['type'], 'invalid')}"
    invalid_value = None if error["type"] in _NO_INPUT else error.get("input")
    return Violation(field, key, MESSAGE_PARAMS.get(key, {}), invalid_value=invalid_value)


def _field_first(violations: List[Violation]) -> List[Violation]:
    return sorted(violations, key=lambda v: v.scope != "field")


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


def _request_violations(exc: ValidationError, payload: Mapping[str, Any]) -> List[Violation]:
    violations: List[Violation] = []
    for error in exc.errors():
        if not error["loc"]:
            violations.append(
                Violation(
                    REQUEST_SCOPE,
                    f"validation.{error['type']}",
                    dict(error.get("ctx") or {}),
                    scope="object",
                )
            )
            continue
        field = _wire_name(ProductRequestDTO, str(error["loc"][0]))
        violations.append(_field_violation(field, f"validation.{field}", error))

    failed = {violation.field for violation in violations}
    if all(v.scope == "field" for v in violations) and not failed & {"price", "quantity"}:
        try:
            StockLevel.model_validate(
                {"price": payload.get("price"), "quantity": payload.get("quantity")}
            )
        except ValidationError as stock_exc:
            violations.extend(
                Violation(
                    REQUEST_SCOPE,
                    f"validation.{error['type']}",
                    dict(error.get("ctx") or {}),
                    scope="object",
                )
                for error in stock_exc.errors()
                if not error["loc"]
            )
    return _field_first(violations)


def validate_product_request(payload: Any) -> ProductRequestDTO:
    """Validate a create/update body and return the typed request.

    Raises:
        MalformedRequest: if the body is not a JSON object.
        ProductValidationError: listing every field error, then any
            business-rule error.
    """
    if not isinstance(payload, Mapping):
        raise MalformedRequest(
            "parsing-error",
            "Request body must be an object.",
            violations=[Violation("body", "request.body.object")],
        )
    try:
        return ProductRequestDTO.model_validate(dict(payload))
    except ValidationError as exc:
        errors = _request_violations(exc, payload)
    logger.info(
        "product.validation_failed",
        fields=[violation.field for violation in errors],
    )
    raise ProductValidationError(errors)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def _query_violations(exc: ValidationError) -> List[Violation]:
    violations: List[Violation] = []
    for error in exc.errors():
        field = _wire_name(ProductQueryDTO, str(error["loc"][0]))
        prefix = QUERY_KEY_PREFIXES.get(field, f"productquery.{field}")
        if error["type"] == "range":
            violations.append(
                Violation(QUERY_SCOPE, f"{prefix}.range.invalid", scope="object")
            )
        else:
            violations.append(_field_violation(field, prefix, error))
    return _field_first(violations)


def validate_product_query(data: Mapping[str, Any]) -> ProductQueryDTO:
    """Build the filter query, checking bounds and ranges.

    ``data`` uses the camelCase parameter names.

    Raises:
        ProductValidationError: for out-of-bounds values or a range whose
            maximum is below its minimum.
    """
    try:
        return ProductQueryDTO.model_validate(dict(data))
    except ValidationError as exc:
        errors = _query_violations(exc)
    logger.info(
        "product.query_rejected",
        fields=[violation.field for violation in errors],
    )
    raise ProductValidationError(errors)
