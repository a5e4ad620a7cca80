"""Product model.

Business rules implemented at the storage layer:
- ``name`` is unique; the database constraint is the final authority when
  two creates race past the service pre-check.
- ``price`` stays within [0.01, 999999.99] and ``quantity`` within
  [0, 999999] (check constraints), so a bypassed validation still fails.
- ``public_id`` is generated once, on first save, and never changes.
"""

from __future__ import annotations

from decimal import Decimal

import uuid6
from django.db import models

from modules.core.models import TimestampedModel

PRICE_MIN = Decimal("0.01")
PRICE_MAX = Decimal("999999.99")
QUANTITY_MAX = 999999
NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


class Product(TimestampedModel):
    """Product inventory record.

    ``id`` is the internal sequential key and never leaves the service;
    clients only ever see ``public_id``.
    """

    id = models.BigAutoField(primary_key=True)
    public_id = models.CharField(max_length=36, unique=True, editable=False)
    name = models.CharField(max_length=NAME_MAX_LENGTH, unique=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    description = models.CharField(
        max_length=DESCRIPTION_MAX_LENGTH, blank=True, null=True
    )
    quantity = models.PositiveIntegerField()

    class Meta:
        db_table = "products"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=PRICE_MIN) & models.Q(price__lte=PRICE_MAX),
                name="products_price_range",
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__lte=QUANTITY_MAX),
                name="products_quantity_max",
            ),
        ]

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        if not self.public_id:
            self.public_id = str(uuid6.uuid7())
        super().save(*args, **kwargs)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.name} ({self.public_id})"
