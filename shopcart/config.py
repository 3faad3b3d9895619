from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]  # .../shopcart project
load_dotenv(dotenv_path=ROOT_DIR / ".env")


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_int(*keys: str, default: int | None = None) -> int | None:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return int(v)


def _get_decimal(*keys: str, default: str) -> Decimal:
    v = _get_env(*keys, default=default)
    try:
        return Decimal(v.replace(",", "."))
    except InvalidOperation:
        raise ValueError(f"{keys[0]} is not a number: {v}") from None


@dataclass(frozen=True)
class Settings:
    bot_token: str
    admin_id: int
    discount_rate: Decimal
    decimals: int
    log_level: str


def load_settings() -> Settings:
    return Settings(
        bot_token=_get_env("BOT_TOKEN", "TELEGRAM_BOT_TOKEN", default="") or "",
        admin_id=_get_int("ADMIN_ID", "ADMIN_TG_ID", default=0) or 0,
        discount_rate=_get_decimal("DISCOUNT_RATE", default="0.1"),
        decimals=int(_get_int("DECIMALS", default=2)),
        log_level=(_get_env("LOG_LEVEL", default="INFO") or "INFO").upper(),
    )


settings = load_settings()


def require_bot_settings(s: Settings = settings) -> None:
    if not s.bot_token:
        raise RuntimeError("BOT_TOKEN is empty. Set BOT_TOKEN in .env")
