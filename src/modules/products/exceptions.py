"""Product domain exceptions.

Raised by the Service Layer when business rules are violated and mapped to
problem documents by ``modules.core.exception_handler``.  Views never catch
them.
"""

from __future__ import annotations

from typing import Any, Dict, List

from modules.core.exceptions import ApiError, ErrorKind, RequestValidationError


class ProductAlreadyExists(ApiError):
    """A product with the same name already exists."""

    kind = ErrorKind.ALREADY_EXISTS

    def __init__(self, name: str) -> None:
        super().__init__(f"Product '{name}' already exists.")
        self.name = name

    def message_params(self) -> Dict[str, Any]:
        return {"product_name": self.name}

    def problem_properties(self) -> Dict[str, Any]:
        return {"productName": self.name}


class ProductNotFound(ApiError):
    """No product matches the requested public ID."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, public_id: str) -> None:
        super().__init__(f"Product {public_id} not found.")
        self.public_id = public_id

    def message_params(self) -> Dict[str, Any]:
        return {"product_id": self.public_id}

    def problem_properties(self) -> Dict[str, Any]:
        return {"productId": self.public_id}


class ProductValidationError(RequestValidationError):
    """A product request or filter query broke one or more rules."""

    @property
    def fields(self) -> List[str]:
        return [violation.field for violation in self.violations]
