import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from shopcart.bot.handlers import router
from shopcart.config import require_bot_settings, settings
from shopcart.console.menu import Console
from shopcart.services.cart import Cart, log_cart_event
from shopcart.services.catalog import default_catalog
from shopcart.services.pricing import discount_from_rate


def _setup_logging() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def main() -> None:
    _setup_logging()

    cart = Cart(
        default_catalog(),
        discount=discount_from_rate(settings.discount_rate),
        on_change=log_cart_event,
    )
    Console(cart).run()


async def bot_main() -> None:
    _setup_logging()
    require_bot_settings()

    bot = Bot(token=settings.bot_token, default=DefaultBotProperties(parse_mode=ParseMode.HTML))
    dp = Dispatcher()
    dp.include_router(router)

    await dp.start_polling(bot)


def run_bot() -> None:
    asyncio.run(bot_main())


if __name__ == "__main__":
    main()
