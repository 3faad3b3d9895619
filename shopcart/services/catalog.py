from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from shopcart.constants import CATALOG
from shopcart.errors import ProductNotFound
from shopcart.models import Product, product_key


class Catalog:
    """Fixed product list. Never mutated after construction."""

    def __init__(self, products: Iterable[Product]):
        self._products = tuple(products)

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def find_by_name(self, name: str) -> Optional[Product]:
        key = product_key(name)
        for p in self._products:
            if p.key == key and p.available:
                return p
        return None

    def require(self, name: str) -> Product:
        product = self.find_by_name(name)
        if product is None:
            raise ProductNotFound(f"Product not found or not available: {name}")
        return product

    def available_products(self) -> List[Product]:
        return [p for p in self._products if p.available]


def default_catalog() -> Catalog:
    return Catalog(Product(name, price, available) for name, price, available in CATALOG)
