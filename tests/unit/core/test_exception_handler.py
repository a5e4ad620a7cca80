"""Unit tests for the problem-document exception handler.

Covers:
- domain errors mapped by kind (status, type, title, detail, extras);
- violation ordering and rendering;
- storage, parse, DRF and unexpected errors;
- localization through Accept-Language.
"""

from __future__ import annotations

import pytest
from django.db import IntegrityError
from django.http import Http404
from django.test import RequestFactory
from rest_framework.exceptions import MethodNotAllowed, ParseError, Throttled

from modules.core.exception_handler import (
    PROBLEM_CONTENT_TYPE,
    problem_exception_handler,
    problem_type,
    render_violations,
)
from modules.core.exceptions import MalformedRequest, Violation
from modules.products.exceptions import (
    ProductAlreadyExists,
    ProductNotFound,
    ProductValidationError,
)

pytestmark = pytest.mark.unit

BASE = "https://api.productmanagement.com.br"


def _handle(exc, accept_language=None, path="/api/v1/products/"):
    headers = {"HTTP_ACCEPT_LANGUAGE": accept_language} if accept_language else {}
    request = RequestFactory().get(path, **headers)
    return problem_exception_handler(exc, {"request": request})


class TestProblemType:
    def test_uses_base_url(self):
        assert problem_type("validation-error") == f"{BASE}/validation-error"

    def test_trailing_slash_in_setting(self, settings):
        settings.PROBLEM_TYPE_BASE_URL = "https://errors.example.com/"
        assert problem_type("x") == "https://errors.example.com/x"


class TestDomainErrors:
    def test_not_found(self):
        response = _handle(ProductNotFound("abc"), path="/api/v1/products/abc/")
        assert response.status_code == 404
        assert response.content_type == PROBLEM_CONTENT_TYPE
        assert response.data == {
            "type": f"{BASE}/product-not-found",
            "title": "Product Not Found",
            "status": 404,
            "detail": "No product exists with public ID 'abc'.",
            "instance": "/api/v1/products/abc/",
            "productId": "abc",
        }

    def test_already_exists(self):
        response = _handle(ProductAlreadyExists("Widget"))
        assert response.status_code == 409
        assert response.data["type"] == f"{BASE}/product-already-exists"
        assert response.data["productName"] == "Widget"
        assert "Widget" in response.data["detail"]

    def test_validation_lists_errors(self):
        exc = ProductValidationError(
            [
                Violation(
                    "product",
                    "validation.business.low.value",
                    {"threshold": "10.00", "limit": 100},
                    scope="object",
                ),
                Violation("name", "validation.name.required"),
            ]
        )
        response = _handle(exc)
        assert response.status_code == 400
        assert response.data["type"] == f"{BASE}/validation-error"
        assert [e["field"] for e in response.data["errors"]] == ["name", "product"]
        assert response.data["errors"][0] == {"field": "name", "message": "Name is required."}

    @pytest.mark.parametrize(
        ("problem", "title"),
        [
            ("parsing-error", "Malformed Request Body"),
            ("type-mismatch", "Type Mismatch"),
            ("invalid-argument", "Invalid Argument"),
        ],
    )
    def test_malformed_request(self, problem, title):
        response = _handle(MalformedRequest(problem))
        assert response.status_code == 400
        assert response.data["type"] == f"{BASE}/{problem}"
        assert response.data["title"] == title
        assert "errors" not in response.data

    def test_malformed_request_with_violations(self):
        exc = MalformedRequest(
            "type-mismatch",
            violations=[
                Violation(
                    "minPrice",
                    "type.mismatch.field.message",
                    {"field": "minPrice", "expected": "number"},
                    invalid_value="abc",
                )
            ],
        )
        response = _handle(exc)
        assert response.data["errors"] == [
            {
                "field": "minPrice",
                "message": "Parameter 'minPrice' must be a valid number.",
                "invalidValue": "abc",
            }
        ]


class TestLocalization:
    def test_portuguese(self):
        response = _handle(ProductNotFound("abc"), accept_language="pt-BR")
        assert response.data["detail"] == "Nenhum produto existe com o ID público 'abc'."

    def test_spanish(self):
        response = _handle(ProductNotFound("abc"), accept_language="es")
        assert response.data["detail"] == "No existe ningún producto con el ID público 'abc'."

    def test_unsupported_falls_back_to_english(self):
        response = _handle(ProductNotFound("abc"), accept_language="ja-JP")
        assert response.data["title"] == "Product Not Found"


class TestOtherErrors:
    def test_integrity_error(self):
        response = _handle(IntegrityError("UNIQUE constraint failed: products.name"))
        assert response.status_code == 409
        assert response.data["type"] == f"{BASE}/database-constraint-violation"
        assert "UNIQUE" not in response.data["detail"]

    def test_parse_error(self):
        response = _handle(ParseError("JSON parse error - Expecting value"))
        assert response.status_code == 400
        assert response.data["type"] == f"{BASE}/parsing-error"
        assert response.data["detail"] == "The request body could not be parsed."

    def test_http404(self):
        response = _handle(Http404())
        assert response.status_code == 404
        assert response.data["type"] == "about:blank"
        assert response.data["title"] == "Not Found"

    def test_method_not_allowed(self):
        response = _handle(MethodNotAllowed("PATCH"))
        assert response.status_code == 405
        assert response.data["title"] == "Method Not Allowed"
        assert response.content_type == PROBLEM_CONTENT_TYPE

    def test_throttled_sets_retry_after(self):
        response = _handle(Throttled(wait=30))
        assert response.status_code == 429
        assert response["Retry-After"] == "30"

    def test_unexpected_error_hides_details(self):
        response = _handle(RuntimeError("secret stack detail"))
        assert response.status_code == 500
        assert response.data["type"] == f"{BASE}/internal-server-error"
        assert "secret" not in response.data["detail"]


class TestRenderViolations:
    def test_invalid_value_stringified(self):
        rendered = render_violations(
            [Violation("quantity", "validation.quantity.min", {"min": 0}, invalid_value=-1)],
            "en-us",
        )
        assert rendered == [
            {"field": "quantity", "message": "Quantity must be at least 0.", "invalidValue": "-1"}
        ]

    def test_none_invalid_value_omitted(self):
        rendered = render_violations([Violation("price", "validation.price.required")], "en-us")
        assert "invalidValue" not in rendered[0]
