"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.  Look-ups
follow the Null Object pattern: they return ``None`` instead of raising,
and the Service Layer decides how to translate a missing entity.
"""

from __future__ import annotations

from typing import Optional

import structlog
from django.db import transaction
from django.db.models import Q, QuerySet

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_public_id(self, public_id: str) -> Optional[Product]:
        return Product.objects.filter(public_id=public_id).first()

    def exists_by_name(self, name: str, exclude_public_id: Optional[str] = None) -> bool:
        queryset = Product.objects.filter(name=name)
        if exclude_public_id is not None:
            queryset = queryset.exclude(public_id=exclude_public_id)
        return queryset.exists()

    def find_all(self, specification: Q) -> QuerySet[Product]:
        """Lazy and unordered; the view orders and paginates it in the database."""
        return Product.objects.filter(specification)

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        entity.save()
        logger.info("product.saved", public_id=entity.public_id)
        return entity

    @transaction.atomic
    def delete(self, entity: Product) -> None:
        """Hard-delete a product row."""
        public_id = entity.public_id
        entity.delete()
        logger.info("product.row_deleted", public_id=public_id)
