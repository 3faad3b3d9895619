from decimal import Decimal

from shopcart.config import settings
from shopcart.models import Product


def money(v: Decimal, decimals: int | None = None) -> str:
    places = settings.decimals if decimals is None else decimals
    return f"${v:.{places}f}"


def product_line(p: Product) -> str:
    return f"{p.name} - Price: {money(p.price)}"


def cart_line(p: Product, qty: int) -> str:
    return f"You have {qty} {p.name} in your cart."


def total_line(total: Decimal) -> str:
    return f"Total Bill: Your total bill is {money(total)}."
