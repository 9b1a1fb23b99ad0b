from typing import List, Optional

from aiogram.types import BotCommand, InlineKeyboardButton, InlineKeyboardMarkup

from wechat_shop.services.dispatcher import Choice


def inline_kb(rows: List[List[Choice]]) -> Optional[InlineKeyboardMarkup]:
    if not rows:
        return None
    keyboard = []
    for row in rows:
        buttons = []
        for ch in row:
            if ch.url:
                buttons.append(InlineKeyboardButton(text=ch.text, url=ch.url))
            else:
                buttons.append(InlineKeyboardButton(text=ch.text, callback_data=ch.callback_data))
        keyboard.append(buttons)
    return InlineKeyboardMarkup(inline_keyboard=keyboard)


def bot_commands() -> List[BotCommand]:
    return [
        BotCommand(command="start", description="Welcome"),
        BotCommand(command="shop", description="Choose a plan"),
        BotCommand(command="cart", description="View your cart"),
        BotCommand(command="help", description="How it works"),
    ]
