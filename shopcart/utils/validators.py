from shopcart.errors import InvalidQuantity


def parse_quantity(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise InvalidQuantity(f"Invalid quantity: {text.strip()}") from None


def require_positive_quantity(qty: int) -> None:
    if qty <= 0:
        raise InvalidQuantity(f"Invalid quantity: {qty}")
