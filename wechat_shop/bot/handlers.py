import logging
from typing import Optional

from aiogram import F, Router
from aiogram.filters import Command, CommandStart
from aiogram.types import CallbackQuery, FSInputFile, InaccessibleMessage, Message

from wechat_shop.bot.keyboards import inline_kb
from wechat_shop.config import settings
from wechat_shop.constants import (
    CB_ADD_PREFIX,
    CB_CHECKOUT,
    CB_CLEAR_CART,
    CB_OPEN_HELP,
    CB_OPEN_SHOP,
    CB_VIEW_CART,
)
from wechat_shop.db.json_store import CartStore
from wechat_shop.errors import StoreWriteFailure
from wechat_shop.services import dispatcher
from wechat_shop.services.dispatcher import Reply
from wechat_shop.services.receipt_pdf import generate_receipt_pdf

log = logging.getLogger(__name__)

router = Router()

SAVE_FAILED_TEXT = "⚠️ Could not save your cart. Please try again."

# Telegram caps callback alerts at 200 characters
ALERT_LIMIT = 200


def _uid(event) -> str:
    return str(event.from_user.id)


async def _send(message: Message, reply: Reply) -> None:
    await message.answer(reply.text, reply_markup=inline_kb(reply.choices))


async def _answer_in_chat(callback: CallbackQuery, reply: Reply, toast: Optional[str] = None) -> Optional[Message]:
    """
    Acknowledges the callback and posts the reply in its chat.

    Buttons on old or deleted messages come without an accessible message;
    the reply text is then shown as an alert instead.
    """
    chat = callback.message
    if chat is None or isinstance(chat, InaccessibleMessage):
        await callback.answer(reply.text[:ALERT_LIMIT], show_alert=True)
        return None
    if toast:
        await callback.answer(toast)
    else:
        await callback.answer()
    await _send(chat, reply)
    return chat


@router.message(CommandStart())
async def cmd_start(message: Message):
    await _send(message, dispatcher.start(message.from_user.first_name))


@router.message(Command("shop"))
async def cmd_shop(message: Message):
    await _send(message, dispatcher.list_products())


@router.message(Command("cart"))
async def cmd_cart(message: Message, store: CartStore):
    await _send(message, dispatcher.view_cart(store, _uid(message)))


@router.message(Command("help"))
async def cmd_help(message: Message):
    await _send(message, dispatcher.help_text())


@router.callback_query(F.data == CB_OPEN_SHOP)
async def cb_open_shop(callback: CallbackQuery):
    await _answer_in_chat(callback, dispatcher.list_products())


@router.callback_query(F.data == CB_OPEN_HELP)
async def cb_open_help(callback: CallbackQuery):
    await _answer_in_chat(callback, dispatcher.help_text())


@router.callback_query(F.data.startswith(CB_ADD_PREFIX))
async def cb_add_item(callback: CallbackQuery, store: CartStore):
    option_id = callback.data[len(CB_ADD_PREFIX):]
    try:
        reply = dispatcher.add_item(store, _uid(callback), option_id)
    except StoreWriteFailure:
        await callback.answer(SAVE_FAILED_TEXT, show_alert=True)
        return
    await callback.answer(reply.text)


@router.callback_query(F.data == CB_VIEW_CART)
async def cb_view_cart(callback: CallbackQuery, store: CartStore):
    await _answer_in_chat(callback, dispatcher.view_cart(store, _uid(callback)))


@router.callback_query(F.data == CB_CLEAR_CART)
async def cb_clear_cart(callback: CallbackQuery, store: CartStore):
    try:
        reply = dispatcher.clear_cart(store, _uid(callback))
    except StoreWriteFailure:
        await callback.answer(SAVE_FAILED_TEXT, show_alert=True)
        return
    await _answer_in_chat(callback, reply, toast="Cart cleared")


@router.callback_query(F.data == CB_CHECKOUT)
async def cb_checkout(callback: CallbackQuery, store: CartStore):
    try:
        reply = dispatcher.checkout(store, _uid(callback))
    except StoreWriteFailure:
        await callback.answer(SAVE_FAILED_TEXT, show_alert=True)
        return

    if reply.toast:
        await callback.answer(reply.text)
        return

    chat = await _answer_in_chat(callback, reply)
    if chat is None or reply.receipt is None or not settings.receipt_pdf:
        return
    try:
        pdf_path = generate_receipt_pdf(reply.receipt)
        await chat.answer_document(FSInputFile(pdf_path))
    except Exception as e:
        log.exception("receipt PDF failed for order %s", reply.receipt.order_id)
        await chat.answer(f"⚠️ Order placed, but the receipt PDF was not generated: {e}")


@router.callback_query()
async def cb_fallback(callback: CallbackQuery):
    await callback.answer()
