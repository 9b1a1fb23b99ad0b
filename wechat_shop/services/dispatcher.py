from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from wechat_shop.catalog import entry_for_option, find_option, get_catalog_entry
from wechat_shop.config import settings
from wechat_shop.constants import (
    CB_ADD_PREFIX,
    CB_CHECKOUT,
    CB_CLEAR_CART,
    CB_OPEN_HELP,
    CB_OPEN_SHOP,
    CB_VIEW_CART,
)
from wechat_shop.db.json_store import CartStore, UserId
from wechat_shop.errors import EmptyCartError, OptionNotFound
from wechat_shop.models import OrderReceipt
from wechat_shop.utils.formatters import money


@dataclass(frozen=True)
class Choice:
    text: str
    callback_data: Optional[str] = None
    url: Optional[str] = None


@dataclass
class Reply:
    text: str
    choices: List[List[Choice]] = field(default_factory=list)
    # shown as a callback toast instead of a chat message
    toast: bool = False
    receipt: Optional[OrderReceipt] = None


EMPTY_CART_TEXT = "🧺 Your cart is empty. Use /shop to add an option."


def start(display_name: Optional[str]) -> Reply:
    name = display_name or "friend"
    text = (
        f"👋 Hi {name}!\n\n"
        "Welcome to our WeChat Account Shop.\n"
        "We sell ready-to-use WeChat accounts with different durations.\n\n"
        "How we work: you choose a plan, add to cart, pay, and we deliver the account privately.\n"
        "Reliable, fast, and secure."
    )
    contact = [Choice("❓ Help", callback_data=CB_OPEN_HELP)]
    if settings.contact_url:
        contact.append(Choice("💬 Contact", url=settings.contact_url))
    return Reply(text, choices=[[Choice("🛒 Shop", callback_data=CB_OPEN_SHOP)], contact])


def list_products() -> Reply:
    entry = get_catalog_entry()
    lines = [f"🛍️ {entry.name}", "Choose a duration:", ""]
    choices = []
    for o in entry.options:
        lines.append(f"{o.title} — {money(o.price)}")
        choices.append([Choice(f"Add {o.title} ({money(o.price)})", callback_data=f"{CB_ADD_PREFIX}{o.id}")])
    choices.append([Choice("View Cart", callback_data=CB_VIEW_CART)])
    return Reply("\n".join(lines), choices=choices)


def add_item(store: CartStore, user_id: UserId, option_id: str) -> Reply:
    try:
        store.add_item(user_id, option_id)
    except OptionNotFound:
        return Reply("Option not found", toast=True)
    opt = find_option(option_id)
    return Reply(f"Added {opt.title} to your cart ✅", toast=True)


def view_cart(store: CartStore, user_id: UserId) -> Reply:
    summary = store.get_summary(user_id)
    stale = ""
    if summary.unknown_option_ids:
        stale = f"⚠️ {len(summary.unknown_option_ids)} item(s) are no longer available and were skipped.\n"

    if summary.is_empty:
        return Reply(stale + EMPTY_CART_TEXT)

    lines = ["🧾 Your Cart:", ""]
    for idx, it in enumerate(summary.lines, start=1):
        entry = entry_for_option(it.option_id)
        lines.append(f"{idx}. {entry.name} — {it.title} x{it.qty} = {money(it.line_total)}")
    lines.append("")
    lines.append(f"Total: {money(summary.total)}")
    if stale:
        lines.append("")
        lines.append(stale.rstrip())

    return Reply(
        "\n".join(lines),
        choices=[
            [Choice("Checkout", callback_data=CB_CHECKOUT)],
            [Choice("Clear Cart", callback_data=CB_CLEAR_CART)],
        ],
    )


def clear_cart(store: CartStore, user_id: UserId) -> Reply:
    store.clear_cart(user_id)
    return Reply("Your cart is now empty.")


def checkout(store: CartStore, user_id: UserId) -> Reply:
    try:
        receipt = store.checkout(user_id)
    except EmptyCartError:
        return Reply("Cart is empty", toast=True)
    text = (
        f"✅ Order {receipt.order_id} placed. We will send account details privately shortly.\n"
        f"Total: {money(receipt.total)}\n"
        "If you need help, type /help or contact support."
    )
    return Reply(text, receipt=receipt)


def help_text() -> Reply:
    text = (
        "❓ How it works:\n"
        "1) Use /shop to pick an option (1/3/6 months).\n"
        "2) Add to cart. View cart with /cart.\n"
        "3) Press Checkout and follow payment instructions (will be added soon).\n"
        "4) After payment we deliver account privately.\n\n"
        f"Need support? Contact: @{settings.support_username}"
    )
    return Reply(text)
