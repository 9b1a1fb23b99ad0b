import asyncio
import logging
from aiogram import Bot, Dispatcher

from wechat_shop.bot.handlers import router
from wechat_shop.bot.keyboards import bot_commands
from wechat_shop.config import require_bot_token, settings
from wechat_shop.db.json_store import CartStore

log = logging.getLogger(__name__)


async def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    token = require_bot_token()
    store = CartStore(settings.carts_path)

    bot = Bot(token=token)
    dp = Dispatcher(store=store)
    dp.include_router(router)

    await bot.set_my_commands(bot_commands())

    log.info("Bot running")
    try:
        await dp.start_polling(bot)
    finally:
        await bot.session.close()

if __name__ == "__main__":
    asyncio.run(main())
