from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True, eq=False)
class Product:
    """A catalog product. Identity is the name, compared ignoring case."""

    name: str
    price: Decimal
    available: bool = True
    key: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        price = Decimal(str(self.price))
        if price < 0:
            raise ValueError(f"price must be >= 0, got {price}")
        object.__setattr__(self, "price", price)
        object.__setattr__(self, "key", product_key(self.name))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


@dataclass(frozen=True)
class CartEvent:
    action: str  # added / updated / removed / cleared
    product: Product | None
    quantity: int


def product_key(name: str) -> str:
    return name.strip().casefold()
