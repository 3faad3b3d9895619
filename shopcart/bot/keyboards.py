from aiogram.types import KeyboardButton, ReplyKeyboardMarkup

from shopcart.constants import MENU

# menu key -> command the button stands for
MENU_COMMANDS = {
    "1": "add",
    "2": "update",
    "3": "remove",
    "4": "cart",
    "5": "products",
    "6": "exit",
}

BUTTON_COMMANDS = {f"{key}. {title}": MENU_COMMANDS[key] for key, title in MENU.items()}


def main_kb() -> ReplyKeyboardMarkup:
    buttons = [KeyboardButton(text=text) for text in BUTTON_COMMANDS]
    return ReplyKeyboardMarkup(
        keyboard=[buttons[0:2], buttons[2:4], buttons[4:6]],
        resize_keyboard=True,
    )
