from __future__ import annotations

import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from groupsplit.config import get_settings
from groupsplit.handlers import basic_router, expenses_router, participants_router, settlement_router
from groupsplit.logging import configure_logging, get_logger


async def main() -> None:
    settings = get_settings()
    configure_logging(getattr(logging, settings.log_level.upper(), logging.INFO))
    if not settings.bot_token:
        raise SystemExit("BOT_TOKEN is not set")

    bot = Bot(token=settings.bot_token, default=DefaultBotProperties(parse_mode=ParseMode.HTML))
    dp = Dispatcher()

    dp.include_router(basic_router)
    dp.include_router(participants_router)
    dp.include_router(expenses_router)
    dp.include_router(settlement_router)

    log = get_logger(__name__)
    log.info("bot.start", summary_enabled=bool(settings.openai_api_key))
    try:
        await dp.start_polling(bot)
    finally:
        await bot.session.close()
        log.info("bot.stop")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
