"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  DTOs are
immutable (``frozen=True``) and speak camelCase on the wire through an
alias generator, while Python code uses snake_case attribute names.

- ``ProductRequestDTO``: create/update payload; field constraints plus the
  stock-level business rules.
- ``ProductQueryDTO``: typed filter query with bounds and min/max ranges.
- ``ProductOutputDTO``: the client-facing representation.

Business rules (inventory risk control):
- low-value goods (price < 10.00) are capped at 100 units;
- luxury goods (price > 10000.00) are capped at 10 units.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Annotated, Any, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from modules.products.models import (
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PRICE_MAX,
    PRICE_MIN,
    QUANTITY_MAX,
)

if TYPE_CHECKING:
    from modules.products.models import Product


NAME_MIN_LENGTH = 3
PRICE_SCALE = 2
QUANTITY_MIN = 0

LOW_VALUE_THRESHOLD = Decimal("10.00")
LOW_VALUE_MAX_QUANTITY = 100
HIGH_VALUE_THRESHOLD = Decimal("10000.00")
HIGH_VALUE_MAX_QUANTITY = 10

QUERY_NAME_MIN_LENGTH = 1
QUERY_NAME_MAX_LENGTH = 50

_CENTS = Decimal("0.01")

_WIRE_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


def _to_cents(value: Decimal) -> Decimal:
    return value.quantize(_CENTS)


def _reject_bool(value: Any) -> Any:
    if isinstance(value, bool):
        raise PydanticCustomError("invalid", "a number is required")
    return value


def _decimal_input(value: Any) -> Any:
    # str() keeps the literal digits: 19.99, not 19.989999...
    if isinstance(value, float):
        return str(value)
    return _reject_bool(value)


Price = Annotated[
    Decimal,
    Field(ge=PRICE_MIN, le=PRICE_MAX, decimal_places=PRICE_SCALE),
    AfterValidator(_to_cents),
    BeforeValidator(_decimal_input),
]
Quantity = Annotated[
    int,
    Field(ge=QUANTITY_MIN, le=QUANTITY_MAX),
    BeforeValidator(_reject_bool),
]
PriceBound = Annotated[Decimal, Field(ge=PRICE_MIN, le=PRICE_MAX)]
QuantityBound = Annotated[int, Field(ge=QUANTITY_MIN, le=QUANTITY_MAX)]


def check_stock_level(price: Decimal, quantity: int) -> None:
    """Raise the business-rule error for a disallowed price/quantity pair."""
    if price < LOW_VALUE_THRESHOLD and quantity > LOW_VALUE_MAX_QUANTITY:
        raise PydanticCustomError(
            "business.low.value",
            "Products under {threshold} are limited to {limit} units",
            {"threshold": LOW_VALUE_THRESHOLD, "limit": LOW_VALUE_MAX_QUANTITY},
        )
    if price > HIGH_VALUE_THRESHOLD and quantity > HIGH_VALUE_MAX_QUANTITY:
        raise PydanticCustomError(
            "business.high.value",
            "Products over {threshold} are limited to {limit} units",
            {"threshold": HIGH_VALUE_THRESHOLD, "limit": HIGH_VALUE_MAX_QUANTITY},
        )


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class StockLevel(BaseModel):
    """Price/quantity pair checked against the stock-level rules alone."""

    model_config = _WIRE_CONFIG

    price: Price
    quantity: Quantity

    @model_validator(mode="after")
    def check_stock_limits(self) -> StockLevel:
        check_stock_level(self.price, self.quantity)
        return self


class ProductRequestDTO(BaseModel):
    """Immutable, fully validated product payload.

    Carries no identifiers: ``publicId`` is assigned at persistence time
    and the internal id is never exposed.
    """

    model_config = _WIRE_CONFIG

    name: str = Field(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    price: Price
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    quantity: Quantity

    @field_validator("name", "price", "quantity", mode="before")
    @classmethod
    def reject_blank(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise PydanticCustomError(
                "required", "{field} is required", {"field": info.field_name}
            )
        return value

    @model_validator(mode="after")
    def check_stock_limits(self) -> ProductRequestDTO:
        check_stock_level(self.price, self.quantity)
        return self


class ProductQueryDTO(BaseModel):
    """Immutable filter query.  Every criterion is optional.

    ``include_out_of_stock`` defaults to ``True`` when omitted or ``None``.
    A range whose maximum is below its minimum is rejected; it is only
    checked when both of its bounds are individually valid.
    """

    model_config = _WIRE_CONFIG

    name: Optional[str] = Field(
        None, min_length=QUERY_NAME_MIN_LENGTH, max_length=QUERY_NAME_MAX_LENGTH
    )
    min_price: Optional[PriceBound] = None
    max_price: Optional[PriceBound] = None
    min_quantity: Optional[QuantityBound] = None
    max_quantity: Optional[QuantityBound] = None
    include_out_of_stock: bool = True

    @field_validator("include_out_of_stock", mode="before")
    @classmethod
    def default_to_include(cls, v: Optional[bool]) -> bool:
        return True if v is None else v

    @field_validator("max_price", "max_quantity")
    @classmethod
    def check_range(cls, value: Any, info: ValidationInfo) -> Any:
        lower = info.data.get(info.field_name.replace("max_", "min_"))
        if value is not None and lower is not None and value < lower:
            raise PydanticCustomError("range", "maximum must not be below minimum")
        return value


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class ProductOutputDTO(BaseModel):
    """Immutable DTO for product API responses."""

    model_config = _WIRE_CONFIG

    public_id: str
    name: str
    price: Decimal
    description: Optional[str] = None
    quantity: int

    @classmethod
    def from_entity(cls, product: Product) -> ProductOutputDTO:
        """Build an output DTO from a Product model instance."""
        return cls(
            public_id=product.public_id,
            name=product.name,
            price=product.price,
            description=product.description,
            quantity=product.quantity,
        )

    def to_wire(self) -> dict:
        """JSON-ready dict with camelCase keys and decimal strings."""
        return self.model_dump(mode="json", by_alias=True)
