"""Composable query predicates for listing products.

Each builder returns a Django ``Q`` fragment, or ``None`` when its inputs
are absent ("no constraint").  ``build_specification`` drops the ``None``
fragments and ANDs the rest, so the whole filter runs as one SQL query
that composes with ordering and LIMIT/OFFSET.
"""

from __future__ import annotations

import operator
from decimal import Decimal
from functools import reduce
from typing import List, Optional

from django.db.models import Q

from modules.products.dtos import ProductQueryDTO


def name_contains(name: Optional[str]) -> Optional[Q]:
    """Case-insensitive substring match on the product name."""
    if name is None or not name.strip():
        return None
    return Q(name__icontains=name.strip().lower())


def _between(field: str, minimum, maximum) -> Optional[Q]:
    if minimum is None and maximum is None:
        return None
    if minimum is not None and maximum is not None:
        return Q(**{f"{field}__range": (minimum, maximum)})
    if minimum is not None:
        return Q(**{f"{field}__gte": minimum})
    return Q(**{f"{field}__lte": maximum})


def price_between(min_price: Optional[Decimal], max_price: Optional[Decimal]) -> Optional[Q]:
    """Inclusive price range; either bound may be omitted."""
    return _between("price", min_price, max_price)


def quantity_between(min_quantity: Optional[int], max_quantity: Optional[int]) -> Optional[Q]:
    """Inclusive quantity range; either bound may be omitted."""
    return _between("quantity", min_quantity, max_quantity)


def in_stock() -> Q:
    return Q(quantity__gt=0)


def stock_filter(include_out_of_stock: bool) -> Optional[Q]:
    """No restriction when out-of-stock items are included."""
    if include_out_of_stock:
        return None
    return in_stock()


def build_specification(query: ProductQueryDTO) -> Q:
    """AND every present fragment of ``query``; ``Q()`` when none apply."""
    fragments: List[Optional[Q]] = [
        name_contains(query.name),
        price_between(query.min_price, query.max_price),
        quantity_between(query.min_quantity, query.max_quantity),
        stock_filter(query.include_out_of_stock),
    ]
    present = [fragment for fragment in fragments if fragment is not None]
    return reduce(operator.and_, present, Q())
