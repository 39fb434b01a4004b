import asyncio
from unittest.mock import AsyncMock, MagicMock

from app.bot.services.notifications import TelegramSender


def test_missing_token_skips_send():
    sender = TelegramSender("")
    asyncio.run(sender.send_message(42, "hi"))
    assert sender._bot is None


def test_send_uses_bot():
    sender = TelegramSender("123456:TEST")
    bot = MagicMock()
    bot.send_message = AsyncMock()
    sender._bot = bot

    asyncio.run(sender.send_message(42, "hi"))
    bot.send_message.assert_awaited_once_with(chat_id=42, text="hi")


def test_send_failures_are_not_raised():
    sender = TelegramSender("123456:TEST")
    bot = MagicMock()
    bot.send_message = AsyncMock(side_effect=RuntimeError("network down"))
    sender._bot = bot

    asyncio.run(sender.send_message(42, "hi"))
    bot.send_message.assert_awaited_once()


def test_close_closes_bot_session():
    sender = TelegramSender("123456:TEST")
    bot = MagicMock()
    bot.session.close = AsyncMock()
    sender._bot = bot

    asyncio.run(sender.close())
    bot.session.close.assert_awaited_once()
