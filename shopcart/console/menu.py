from __future__ import annotations

import logging
from typing import Callable

from shopcart.constants import (
    MENU,
    MSG_ADDED,
    MSG_GOODBYE,
    MSG_INVALID_CHOICE,
    MSG_REMOVED,
    MSG_UPDATED,
)
from shopcart.errors import CartError
from shopcart.services.cart import Cart
from shopcart.utils.formatters import cart_line, product_line, total_line
from shopcart.utils.validators import parse_quantity, require_positive_quantity

log = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


class Console:
    """Text menu over a single cart. Reads with `input_fn`, writes with `output`."""

    def __init__(self, cart: Cart, input_fn: InputFn | None = None, output: OutputFn | None = None):
        self.cart = cart
        self._input = input_fn or input
        self._out = output or print

    def show_menu(self) -> None:
        for key, title in MENU.items():
            self._out(f"{key}. {title}")

    def show_products(self) -> None:
        self._out("Available Products:")
        for p in self.cart.list_available_products():
            self._out(product_line(p))

    def show_cart(self) -> None:
        self._out("Cart Items:")
        for p, qty in self.cart.list_cart_contents():
            self._out(cart_line(p, qty))
        self._out(total_line(self.cart.calculate_total()))

    def add(self) -> None:
        self.show_products()
        name = self._input("Enter product name: ")
        qty_text = self._input("Enter quantity: ")
        try:
            product = self.cart.catalog.require(name)
            qty = parse_quantity(qty_text)
            require_positive_quantity(qty)
            self.cart.add_product(product, qty)
        except CartError as e:
            self._report(e)
            return
        self._out(MSG_ADDED)

    def update(self) -> None:
        self.show_cart()
        name = self._input("Enter product name to update quantity: ")
        qty_text = self._input("Enter new quantity: ")
        try:
            product = self.cart.catalog.require(name)
            self.cart.update_quantity(product, parse_quantity(qty_text))
        except CartError as e:
            self._report(e)
            return
        self._out(MSG_UPDATED)

    def remove(self) -> None:
        self.show_cart()
        name = self._input("Enter product name to remove from cart: ")
        try:
            product = self.cart.catalog.require(name)
        except CartError as e:
            self._report(e)
            return
        self.cart.remove_product(product)
        self._out(MSG_REMOVED)

    def _report(self, e: CartError) -> None:
        self._out(str(e))
        log.warning("%s", e)

    def run(self) -> None:
        actions = {
            "1": self.add,
            "2": self.update,
            "3": self.remove,
            "4": self.show_cart,
            "5": self.show_products,
        }
        while True:
            self.show_menu()
            try:
                choice = self._input("").strip()
            except EOFError:
                choice = "6"
            if choice == "6":
                self._out(MSG_GOODBYE)
                return
            action = actions.get(choice)
            if action is None:
                self._out(MSG_INVALID_CHOICE)
                log.warning("Invalid choice: %s", choice)
                continue
            try:
                action()
            except EOFError:
                self._out(MSG_GOODBYE)
                return
