from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiogram.fsm.context import FSMContext
from aiogram.fsm.storage.base import StorageKey
from aiogram.fsm.storage.memory import MemoryStorage

from shopcart.bot import handlers
from shopcart.bot.keyboards import BUTTON_COMMANDS, main_kb
from shopcart.bot.states import CARTS, CartAdd, CartUpdate, get_cart

USER_ID = 42


@pytest.fixture(autouse=True)
def clean_carts():
    CARTS.clear()
    yield
    CARTS.clear()


@pytest.fixture
def state():
    return FSMContext(
        storage=MemoryStorage(),
        key=StorageKey(bot_id=1, chat_id=USER_ID, user_id=USER_ID),
    )


def make_message(text):
    message = MagicMock()
    message.text = text
    message.from_user.id = USER_ID
    message.answer = AsyncMock()
    return message


def last_answer(message):
    return message.answer.await_args.args[0]


async def test_add_wizard(state):
    await handlers.cmd_add(make_message("/add"), state)
    assert await state.get_state() == CartAdd.waiting_name.state

    await handlers.add_name(make_message("laptop"), state)
    assert await state.get_state() == CartAdd.waiting_qty.state

    msg = make_message("2")
    await handlers.add_qty(msg, state)
    assert "Added to cart." in last_answer(msg)
    assert await state.get_state() is None
    assert [(p.name, q) for p, q in get_cart(USER_ID).list_cart_contents()] == [("Laptop", 2)]


async def test_add_unknown_product_ends_wizard(state):
    await handlers.cmd_add(make_message("/add"), state)
    msg = make_message("Phone")
    await handlers.add_name(msg, state)
    assert "Product not found or not available: Phone" in last_answer(msg)
    assert await state.get_state() is None


async def test_add_rejects_zero_quantity(state):
    await state.set_state(CartAdd.waiting_qty)
    await state.update_data(name="Laptop")
    msg = make_message("0")
    await handlers.add_qty(msg, state)
    assert "Invalid quantity: 0" in last_answer(msg)
    assert len(get_cart(USER_ID)) == 0


async def test_update_wizard(state):
    cart = get_cart(USER_ID)
    cart.add_product(cart.catalog.require("Headphones"), 1)

    await handlers.cmd_update(make_message("/update"), state)
    await handlers.update_name(make_message("HEADPHONES"), state)
    assert await state.get_state() == CartUpdate.waiting_qty.state

    msg = make_message("5")
    await handlers.update_qty(msg, state)
    assert "Quantity updated." in last_answer(msg)
    assert cart.quantity_of(cart.catalog.require("Headphones")) == 5


async def test_update_missing_line(state):
    await state.set_state(CartUpdate.waiting_qty)
    await state.update_data(name="Laptop")
    msg = make_message("3")
    await handlers.update_qty(msg, state)
    assert "Product not found in the cart or not available." in last_answer(msg)


async def test_update_missing_line_with_zero_quantity(state):
    await state.set_state(CartUpdate.waiting_qty)
    await state.update_data(name="Headphones")
    msg = make_message("0")
    await handlers.update_qty(msg, state)
    assert "Product not found in the cart or not available." in last_answer(msg)
    assert await state.get_state() is None


async def test_remove_and_cart_display(state):
    cart = get_cart(USER_ID)
    cart.add_product(cart.catalog.require("Laptop"), 1)
    cart.add_product(cart.catalog.require("Headphones"), 2)

    await handlers.cmd_remove(make_message("/remove"), state)
    msg = make_message("laptop")
    await handlers.remove_name(msg, state)
    assert "Product removed from cart." in last_answer(msg)

    msg = make_message("/cart")
    await handlers.cmd_cart(msg, state)
    text = last_answer(msg)
    assert "You have 2 Headphones in your cart." in text
    assert "Laptop" not in text
    expected = Decimal("100") * (1 - get_cart(USER_ID).discount.rate)
    assert f"Total Bill: Your total bill is ${expected:.2f}." in text


async def test_products(state):
    msg = make_message("/products")
    await handlers.cmd_products(msg, state)
    text = last_answer(msg)
    assert "Laptop - Price: $1000.00" in text
    assert "Headphones - Price: $50.00" in text


async def test_exit_drops_cart(state):
    cart = get_cart(USER_ID)
    cart.add_product(cart.catalog.require("Laptop"), 1)
    msg = make_message("/exit")
    await handlers.cmd_exit(msg, state)
    assert last_answer(msg) == "Thank you for shopping!"
    assert USER_ID not in CARTS
    assert len(cart) == 0


async def test_menu_button_routes_to_command(state):
    msg = make_message("5. Display available products")
    await handlers.menu_button(msg, state)
    assert "Available Products:" in last_answer(msg)


async def test_invalid_choice():
    msg = make_message("hello")
    await handlers.invalid_choice(msg)
    assert last_answer(msg) == "Invalid choice. Please enter a valid option."


def test_keyboard_has_every_menu_entry():
    texts = [b.text for row in main_kb().keyboard for b in row]
    assert texts == list(BUTTON_COMMANDS)
    assert len(texts) == 6
