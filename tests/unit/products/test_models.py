"""Unit tests for the Product model.

Covers:
- Valid creation with all fields.
- public_id generation (UUIDv7) and immutability across saves.
- Name uniqueness constraint.
- Price and quantity check constraints.
- Timestamps.
- __str__ representation.
- Creation logged by the service, not the model.
"""

from __future__ import annotations

import logging
import uuid
from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction

from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------


class TestProductCreation:
    """Happy-path creation."""

    def test_create_product_with_valid_data(self):
        p = Product.objects.create(
            name="Widget",
            price=Decimal("19.99"),
            description="A small widget",
            quantity=50,
        )
        p.refresh_from_db()
        assert p.pk is not None
        assert p.name == "Widget"
        assert p.price == Decimal("19.99")
        assert p.description == "A small widget"
        assert p.quantity == 50

    def test_description_is_optional(self):
        p = Product.objects.create(name="Bare", price=Decimal("1.00"), quantity=0)
        p.refresh_from_db()
        assert p.description is None

    def test_sequential_internal_ids(self):
        first = Product.objects.create(name="First", price=Decimal("1.00"), quantity=1)
        second = Product.objects.create(name="Second", price=Decimal("1.00"), quantity=1)
        assert second.id > first.id


# ---------------------------------------------------------------------------
# Public ID
# ---------------------------------------------------------------------------


class TestPublicId:
    def test_generated_on_first_save(self):
        p = Product.objects.create(name="Widget", price=Decimal("1.00"), quantity=1)
        parsed = uuid.UUID(p.public_id)
        assert parsed.version == 7
        assert str(parsed) == p.public_id

    def test_unique_per_product(self):
        a = Product.objects.create(name="Alpha", price=Decimal("1.00"), quantity=1)
        b = Product.objects.create(name="Beta", price=Decimal("1.00"), quantity=1)
        assert a.public_id != b.public_id

    def test_unchanged_by_update(self):
        p = Product.objects.create(name="Widget", price=Decimal("1.00"), quantity=1)
        original = p.public_id
        p.name = "Renamed Widget"
        p.save()
        p.refresh_from_db()
        assert p.public_id == original

    def test_explicit_value_is_kept(self):
        p = Product.objects.create(
            public_id="fixed-id", name="Widget", price=Decimal("1.00"), quantity=1
        )
        assert p.public_id == "fixed-id"


# ---------------------------------------------------------------------------
# Constraints
# ---------------------------------------------------------------------------


class TestProductConstraints:
    def test_name_unique(self):
        Product.objects.create(name="Widget", price=Decimal("1.00"), quantity=1)
        with pytest.raises(IntegrityError), transaction.atomic():
            Product.objects.create(name="Widget", price=Decimal("2.00"), quantity=2)

    def test_name_uniqueness_is_case_sensitive(self):
        Product.objects.create(name="Widget", price=Decimal("1.00"), quantity=1)
        Product.objects.create(name="widget", price=Decimal("1.00"), quantity=1)
        assert Product.objects.count() == 2

    @pytest.mark.parametrize("price", [Decimal("0.00"), Decimal("-1.00"), Decimal("1000000.00")])
    def test_price_out_of_range_rejected_by_database(self, price):
        with pytest.raises(IntegrityError), transaction.atomic():
            Product.objects.create(name="Bad Price", price=price, quantity=1)

    def test_quantity_above_max_rejected_by_database(self):
        with pytest.raises(IntegrityError), transaction.atomic():
            Product.objects.create(name="Too Many", price=Decimal("1.00"), quantity=1_000_000)

    def test_negative_quantity_rejected_by_database(self):
        with pytest.raises(IntegrityError), transaction.atomic():
            Product.objects.create(name="Negative", price=Decimal("1.00"), quantity=-1)

    def test_boundaries_accepted(self):
        Product.objects.create(name="Cheapest", price=Decimal("0.01"), quantity=0)
        Product.objects.create(name="Priciest", price=Decimal("999999.99"), quantity=999999)
        assert Product.objects.count() == 2


# ---------------------------------------------------------------------------
# Timestamps / display
# ---------------------------------------------------------------------------


class TestTimestamps:
    def test_set_on_create(self):
        p = Product.objects.create(name="Widget", price=Decimal("1.00"), quantity=1)
        assert p.created_at is not None
        assert p.updated_at is not None

    def test_updated_at_refreshed_with_update_fields(self):
        p = Product.objects.create(name="Widget", price=Decimal("1.00"), quantity=1)
        before = p.updated_at
        p.quantity = 2
        p.save(update_fields=["quantity"])
        p.refresh_from_db()
        assert p.updated_at >= before
        assert p.quantity == 2


class TestProductStr:
    def test_str(self):
        p = Product.objects.create(name="Widget", price=Decimal("1.00"), quantity=1)
        assert str(p) == f"Widget ({p.public_id})"


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


class TestProductLogging:
    """Creation is logged once, by the service; the model stays silent."""

    def test_model_save_does_not_log(self, caplog):
        with caplog.at_level(logging.DEBUG):
            Product.objects.create(name="Quiet Product", price=Decimal("10.00"), quantity=1)
        assert [r for r in caplog.records if r.name == "modules.products.models"] == []

    def test_service_logs_creation_once(self, caplog):
        service = ProductService(repository=ProductDjangoRepository())
        with caplog.at_level(logging.INFO):
            service.create_product({"name": "Logged Product", "price": "10.00", "quantity": 1})
        created = [r for r in caplog.records if "product.created" in r.getMessage()]
        assert len(created) == 1
        assert created[0].levelno == logging.INFO
