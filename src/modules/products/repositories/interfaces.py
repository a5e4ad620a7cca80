"""Product repository interface.

Extends ``IRepository[Product]`` with the look-ups the product use-cases
need: public-ID access, name uniqueness and specification-driven look-ups.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from django.db.models import Q, QuerySet

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_by_public_id(self, public_id: str) -> Optional[Product]:
        """Retrieve a product by its public identifier."""

    @abstractmethod
    def exists_by_name(self, name: str, exclude_public_id: Optional[str] = None) -> bool:
        """Whether a product (other than ``exclude_public_id``) uses ``name``."""

    @abstractmethod
    def find_all(self, specification: Q) -> QuerySet[Product]:
        """Return a lazy queryset of the products matching ``specification``."""
