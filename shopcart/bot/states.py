from typing import Dict

from aiogram.fsm.state import State, StatesGroup

from shopcart.config import settings
from shopcart.services.cart import Cart, log_cart_event
from shopcart.services.catalog import Catalog, default_catalog
from shopcart.services.pricing import discount_from_rate


class CartAdd(StatesGroup):
    waiting_name = State()
    waiting_qty = State()


class CartUpdate(StatesGroup):
    waiting_name = State()
    waiting_qty = State()


class CartRemove(StatesGroup):
    waiting_name = State()


CATALOG: Catalog = default_catalog()
CARTS: Dict[int, Cart] = {}  # user_id -> cart


def get_cart(user_id: int) -> Cart:
    cart = CARTS.get(user_id)
    if cart is None:
        cart = Cart(
            CATALOG,
            discount=discount_from_rate(settings.discount_rate),
            on_change=log_cart_event,
        )
        CARTS[user_id] = cart
    return cart
