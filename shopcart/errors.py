class CartError(Exception):
    """Recoverable cart error; drivers report the message and carry on."""


class ProductNotFound(CartError, LookupError):
    pass


class InvalidQuantity(CartError, ValueError):
    pass
