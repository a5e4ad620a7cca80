"""Base API error types shared by every module.

Each error carries an ``ErrorKind`` tag.  The DRF exception handler in
``modules.core.exception_handler`` dispatches on that tag to build the
problem document, so modules only raise and never build responses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    MALFORMED_REQUEST = "malformed_request"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    STORAGE_CONSTRAINT = "storage_constraint"
    INTERNAL = "internal"


@dataclass(frozen=True)
class Violation:
    """A single failed rule.

    ``scope`` is ``"field"`` for field-level checks and ``"object"`` for
    rules spanning several fields, in which case ``field`` names the request.
    ``message_key`` is looked up in the message catalog when the problem
    document is rendered.
    """

    field: str
    message_key: str
    params: Dict[str, Any] = field(default_factory=dict)
    invalid_value: Any = None
    scope: str = "field"


class ApiError(Exception):
    """Base class for errors that map onto a problem document."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str = "", violations: Optional[List[Violation]] = None):
        super().__init__(message)
        self.violations: List[Violation] = list(violations or [])

    def message_params(self) -> Dict[str, Any]:
        """Placeholders for the localized ``detail`` template."""
        return {}

    def problem_properties(self) -> Dict[str, Any]:
        """Extra top-level members of the problem document."""
        return {}


class RequestValidationError(ApiError):
    """Field-level or cross-field constraint failure."""

    kind = ErrorKind.VALIDATION

    def __init__(self, violations: List[Violation]) -> None:
        super().__init__(
            f"{len(violations)} validation error(s).", violations=violations
        )


class MalformedRequest(ApiError):
    """Unparseable body, type mismatch or bad query/path parameter.

    ``problem`` selects the problem type slug: ``parsing-error``,
    ``type-mismatch`` or ``invalid-argument``.
    """

    kind = ErrorKind.MALFORMED_REQUEST

    def __init__(
        self,
        problem: str,
        message: str = "",
        violations: Optional[List[Violation]] = None,
    ) -> None:
        super().__init__(message or problem, violations=violations)
        self.problem = problem
