import html
import logging

from aiogram import F, Router
from aiogram.filters import Command, StateFilter
from aiogram.fsm.context import FSMContext
from aiogram.types import Message, ReplyKeyboardRemove

from shopcart.bot.keyboards import BUTTON_COMMANDS, main_kb
from shopcart.bot.states import CATALOG, CARTS, CartAdd, CartRemove, CartUpdate, get_cart
from shopcart.config import settings
from shopcart.constants import (
    MSG_ADDED,
    MSG_GOODBYE,
    MSG_INVALID_CHOICE,
    MSG_REMOVED,
    MSG_UPDATED,
)
from shopcart.errors import CartError
from shopcart.utils.formatters import cart_line, product_line, total_line
from shopcart.utils.validators import parse_quantity, require_positive_quantity

log = logging.getLogger(__name__)

router = Router()


def _is_admin(message: Message) -> bool:
    if not settings.admin_id:
        return True
    try:
        return int(message.from_user.id) == int(settings.admin_id)
    except (AttributeError, TypeError, ValueError):
        return False


def _user_id(message: Message) -> int:
    return int(message.from_user.id)


def _products_text() -> str:
    lines = ["<b>Available Products:</b>"]
    for p in CATALOG.available_products():
        lines.append(html.escape(product_line(p)))
    return "\n".join(lines)


def _cart_text(user_id: int) -> str:
    cart = get_cart(user_id)
    lines = ["<b>Cart Items:</b>"]
    for p, qty in cart.list_cart_contents():
        lines.append(html.escape(cart_line(p, qty)))
    lines.append(html.escape(total_line(cart.calculate_total())))
    return "\n".join(lines)


async def _report(message: Message, state: FSMContext, e: CartError) -> None:
    await state.clear()
    log.warning("%s", e)
    await message.answer(f"❌ {html.escape(str(e))}", reply_markup=main_kb())


@router.message(Command("start"))
async def cmd_start(message: Message, state: FSMContext):
    if not _is_admin(message):
        return
    await state.clear()
    get_cart(_user_id(message))
    await message.answer("✅ Shopping cart ready. Pick an option:", reply_markup=main_kb())


@router.message(Command("help"))
async def cmd_help(message: Message):
    if not _is_admin(message):
        return

    text = (
        "<b>Shopping cart — commands</b>\n\n"
        "/add — add product to cart\n"
        "/update — update quantity\n"
        "/remove — remove product from cart\n"
        "/cart — display cart\n"
        "/products — display available products\n"
        "/exit — empty the cart and finish\n"
        "/cancel — cancel input\n"
    )
    await message.answer(text, reply_markup=main_kb())


@router.message(Command("cancel"))
async def cmd_cancel(message: Message, state: FSMContext):
    if not _is_admin(message):
        return
    await state.clear()
    await message.answer("❎ Cancelled.", reply_markup=main_kb())


@router.message(Command("products"))
async def cmd_products(message: Message, state: FSMContext):
    if not _is_admin(message):
        return
    await state.clear()
    await message.answer(_products_text(), reply_markup=main_kb())


@router.message(Command("cart"))
async def cmd_cart(message: Message, state: FSMContext):
    if not _is_admin(message):
        return
    await state.clear()
    await message.answer(_cart_text(_user_id(message)), reply_markup=main_kb())


@router.message(Command("exit"))
async def cmd_exit(message: Message, state: FSMContext):
    if not _is_admin(message):
        return
    await state.clear()
    cart = CARTS.pop(_user_id(message), None)
    if cart is not None:
        cart.clear()
    await message.answer(MSG_GOODBYE, reply_markup=ReplyKeyboardRemove())


@router.message(Command("add"))
async def cmd_add(message: Message, state: FSMContext):
    if not _is_admin(message):
        return
    await state.clear()
    await state.set_state(CartAdd.waiting_name)
    await message.answer(
        f"{_products_text()}\n\nEnter product name:\nCancel: /cancel",
        reply_markup=ReplyKeyboardRemove(),
    )


@router.message(CartAdd.waiting_name)
async def add_name(message: Message, state: FSMContext):
    if not _is_admin(message):
        return
    try:
        product = CATALOG.require((message.text or "").strip())
    except CartError as e:
        await _report(message, state, e)
        return
    await state.update_data(name=product.name)
    await state.set_state(CartAdd.waiting_qty)
    await message.answer("Enter quantity:\nCancel: /cancel")


@router.message(CartAdd.waiting_qty)
async def add_qty(message: Message, state: FSMContext):
    if not _is_admin(message):
        return
    data = await state.get_data()
    try:
        product = CATALOG.require(data["name"])
        qty = parse_quantity(message.text or "")
        require_positive_quantity(qty)
    except CartError as e:
        await _report(message, state, e)
        return
    get_cart(_user_id(message)).add_product(product, qty)
    await state.clear()
    await message.answer(f"✅ {MSG_ADDED}", reply_markup=main_kb())


@router.message(Command("update"))
async def cmd_update(message: Message, state: FSMContext):
    if not _is_admin(message):
        return
    await state.clear()
    await state.set_state(CartUpdate.waiting_name)
    await message.answer(
        f"{_cart_text(_user_id(message))}\n\nEnter product name to update quantity:\nCancel: /cancel",
        reply_markup=ReplyKeyboardRemove(),
    )


@router.message(CartUpdate.waiting_name)
async def update_name(message: Message, state: FSMContext):
    if not _is_admin(message):
        return
    try:
        product = CATALOG.require((message.text or "").strip())
    except CartError as e:
        await _report(message, state, e)
        return
    await state.update_data(name=product.name)
    await state.set_state(CartUpdate.waiting_qty)
    await message.answer("Enter new quantity:\nCancel: /cancel")


@router.message(CartUpdate.waiting_qty)
async def update_qty(message: Message, state: FSMContext):
    if not _is_admin(message):
        return
    data = await state.get_data()
    try:
        product = CATALOG.require(data["name"])
        get_cart(_user_id(message)).update_quantity(product, parse_quantity(message.text or ""))
    except CartError as e:
        await _report(message, state, e)
        return
    await state.clear()
    await message.answer(f"✅ {MSG_UPDATED}", reply_markup=main_kb())


@router.message(Command("remove"))
async def cmd_remove(message: Message, state: FSMContext):
    if not _is_admin(message):
        return
    await state.clear()
    await state.set_state(CartRemove.waiting_name)
    await message.answer(
        f"{_cart_text(_user_id(message))}\n\nEnter product name to remove from cart:\nCancel: /cancel",
        reply_markup=ReplyKeyboardRemove(),
    )


@router.message(CartRemove.waiting_name)
async def remove_name(message: Message, state: FSMContext):
    if not _is_admin(message):
        return
    try:
        product = CATALOG.require((message.text or "").strip())
    except CartError as e:
        await _report(message, state, e)
        return
    get_cart(_user_id(message)).remove_product(product)
    await state.clear()
    await message.answer(f"✅ {MSG_REMOVED}", reply_markup=main_kb())


_COMMAND_HANDLERS = {
    "add": cmd_add,
    "update": cmd_update,
    "remove": cmd_remove,
    "cart": cmd_cart,
    "products": cmd_products,
    "exit": cmd_exit,
}


@router.message(StateFilter(None), F.text.in_(set(BUTTON_COMMANDS)))
async def menu_button(message: Message, state: FSMContext):
    handler = _COMMAND_HANDLERS[BUTTON_COMMANDS[message.text]]
    await handler(message, state)


@router.message(StateFilter(None))
async def invalid_choice(message: Message):
    if not _is_admin(message):
        return
    log.warning("Invalid choice: %s", message.text)
    await message.answer(MSG_INVALID_CHOICE, reply_markup=main_kb())
