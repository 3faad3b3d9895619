from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Tuple

from shopcart.errors import InvalidQuantity, ProductNotFound
from shopcart.models import CartEvent, Product
from shopcart.services.catalog import Catalog
from shopcart.services.pricing import NO_DISCOUNT, DiscountStrategy

log = logging.getLogger(__name__)

Observer = Callable[[CartEvent], None]


def log_cart_event(event: CartEvent) -> None:
    if event.action == "added":
        log.info("Added %s %s to cart.", event.quantity, event.product.name)
    elif event.action == "updated":
        log.info("Updated quantity of %s to %s", event.product.name, event.quantity)
    elif event.action == "removed":
        log.info("Removed %s from cart.", event.product.name)
    elif event.action == "cleared":
        log.info("Cleared %s line(s) from cart.", event.quantity)


class Cart:
    """In-memory shopping cart: product -> quantity.

    The cart is bound to a catalog for the product listing. Lookups by
    name go through the catalog; the cart itself only sees Product values.
    """

    def __init__(
        self,
        catalog: Catalog,
        discount: DiscountStrategy = NO_DISCOUNT,
        on_change: Optional[Observer] = None,
    ):
        self.catalog = catalog
        self.discount = discount
        self._on_change = on_change
        self._lines: Dict[Product, int] = {}

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, product: object) -> bool:
        return product in self._lines

    def _emit(self, action: str, product: Optional[Product], quantity: int) -> None:
        if self._on_change is not None:
            self._on_change(CartEvent(action, product, quantity))

    def set_discount_strategy(self, discount: DiscountStrategy) -> None:
        self.discount = discount

    def quantity_of(self, product: Product) -> int:
        return self._lines.get(product, 0)

    def add_product(self, product: Product, quantity: int) -> None:
        # no checks here: drivers validate the quantity before calling
        self._lines[product] = self._lines.get(product, 0) + quantity
        self._emit("added", product, quantity)

    def update_quantity(self, product: Product, quantity: int) -> None:
        if product not in self._lines:
            raise ProductNotFound("Product not found in the cart or not available.")
        if quantity <= 0:
            raise InvalidQuantity(f"Invalid quantity: {quantity}")
        self._lines[product] = quantity
        self._emit("updated", product, quantity)

    def remove_product(self, product: Product) -> bool:
        if product not in self._lines:
            return False
        del self._lines[product]
        self._emit("removed", product, 0)
        return True

    def clear(self) -> None:
        count = len(self._lines)
        self._lines.clear()
        self._emit("cleared", None, count)

    def subtotal(self) -> Decimal:
        return sum((p.price * q for p, q in self._lines.items()), Decimal(0))

    def calculate_total(self) -> Decimal:
        return self.discount.apply(self.subtotal(), len(self._lines))

    def list_cart_contents(self) -> List[Tuple[Product, int]]:
        return list(self._lines.items())

    def list_available_products(self) -> List[Product]:
        return self.catalog.available_products()
