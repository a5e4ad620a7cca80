"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.

Rules enforced here:
- every write is validated (field rules, then business rules) before
  storage is touched;
- names are unique: the pre-check gives a friendly ``ProductAlreadyExists``,
  the database unique constraint settles races (``IntegrityError``);
- ``public_id`` and the internal id never change on update;
- delete is idempotent: an unknown ``public_id`` is not an error unless
  ``strict_delete`` is enabled.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

import structlog
from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet

from modules.products.dtos import ProductOutputDTO, ProductQueryDTO
from modules.products.exceptions import ProductAlreadyExists, ProductNotFound
from modules.products.models import Product
from modules.products.specifications import build_specification
from modules.products.validation import validate_product_request

if TYPE_CHECKING:
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    ``strict_delete`` defaults to the ``PRODUCTS_STRICT_DELETE`` setting.
    """

    def __init__(
        self,
        repository: IProductRepository,
        strict_delete: Optional[bool] = None,
    ) -> None:
        self._repo = repository
        if strict_delete is None:
            strict_delete = settings.PRODUCTS_STRICT_DELETE
        self._strict_delete = strict_delete

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self, query: ProductQueryDTO) -> QuerySet[Product]:
        """Return the products matching ``query``, unordered and unsliced.

        Ordering and paging are applied by the caller.
        """
        logger.debug("product.listed", filters=query.model_dump(mode="json", exclude_none=True))
        return self._repo.find_all(build_specification(query))

    def get_product(self, public_id: str) -> ProductOutputDTO:
        """Retrieve a single product by public ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        return ProductOutputDTO.from_entity(self._get_or_raise(public_id))

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, payload: Any) -> ProductOutputDTO:
        """Validate and persist a new product.

        Raises:
            ProductValidationError: if the payload breaks any rule.
            ProductAlreadyExists: if the name is already taken.
        """
        request = validate_product_request(payload)
        log = logger.bind(name=request.name)

        if self._repo.exists_by_name(request.name):
            log.warning("product.duplicate_name")
            raise ProductAlreadyExists(request.name)

        product = Product(
            name=request.name,
            price=request.price,
            description=request.description,
            quantity=request.quantity,
        )
        product = self._repo.save(product)
        log.info("product.created", public_id=product.public_id)
        return ProductOutputDTO.from_entity(product)

    @transaction.atomic
    def update_product(self, public_id: str, payload: Any) -> ProductOutputDTO:
        """Overwrite every mutable field of an existing product.

        Raises:
            ProductValidationError: if the payload breaks any rule.
            ProductNotFound: if the product does not exist.
            ProductAlreadyExists: if another product already uses the name.
        """
        request = validate_product_request(payload)
        product = self._get_or_raise(public_id)
        log = logger.bind(public_id=public_id)

        if request.name != product.name and self._repo.exists_by_name(
            request.name, exclude_public_id=public_id
        ):
            log.warning("product.duplicate_name", name=request.name)
            raise ProductAlreadyExists(request.name)

        product.name = request.name
        product.price = request.price
        product.description = request.description
        product.quantity = request.quantity

        product = self._repo.save(product)
        log.info("product.updated")
        return ProductOutputDTO.from_entity(product)

    @transaction.atomic
    def delete_product(self, public_id: str) -> None:
        """Delete a product; unknown IDs are ignored.

        Raises:
            ProductNotFound: only when ``strict_delete`` is enabled.
        """
        product = self._repo.get_by_public_id(public_id)
        if product is None:
            if self._strict_delete:
                raise ProductNotFound(public_id)
            logger.info("product.delete_skipped", public_id=public_id)
            return
        self._repo.delete(product)
        logger.info("product.deleted", public_id=public_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_or_raise(self, public_id: str) -> Product:
        product = self._repo.get_by_public_id(public_id)
        if product is None:
            raise ProductNotFound(public_id)
        return product
