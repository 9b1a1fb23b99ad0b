from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]  # .../wechat-shop-bot
load_dotenv(dotenv_path=ROOT_DIR / ".env")


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_bool(*keys: str, default: bool) -> bool:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    t = v.lower()
    if t in ("1", "true", "yes", "on"):
        return True
    if t in ("0", "false", "no", "off"):
        return False
    raise RuntimeError(f"{keys[0]} must be one of 1/0, true/false, yes/no, on/off, got: {v!r}")


def _get_path(*keys: str, default: str) -> str:
    v = _get_env(*keys, default=default)
    return str(v)


@dataclass(frozen=True)
class Settings:
    bot_token: str
    carts_path: str
    export_dir: str
    currency: str
    support_username: str
    contact_url: str
    receipt_pdf: bool


settings = Settings(
    bot_token=_get_env("BOT_TOKEN", "TELEGRAM_BOT_TOKEN", default="") or "",
    carts_path=_get_path("CARTS_PATH", "CART_FILE", default=str(ROOT_DIR / "data" / "carts.json")),
    export_dir=_get_path("EXPORT_DIR", default=str(ROOT_DIR / "exports")),
    currency=_get_env("CURRENCY", default="") or "",
    support_username=_get_env("SUPPORT_USERNAME", default="Shiny_thePro") or "Shiny_thePro",
    contact_url=_get_env("CONTACT_URL", default="https://t.me/YourSupportUsername") or "",
    receipt_pdf=_get_bool("RECEIPT_PDF", default=True),
)


def require_bot_token() -> str:
    if not settings.bot_token:
        raise RuntimeError("BOT_TOKEN is empty. Set BOT_TOKEN in .env")
    return settings.bot_token
