# app/bot/services/notifications.py
"""
Отправка сообщений в Telegram.

Отправка "выстрелил и забыл": результат не проверяем,
ошибки только пишем в лог, наружу не кидаем.
"""

from typing import Optional

from aiogram import Bot
import structlog

logger = structlog.get_logger()


class TelegramSender:
    """
    Обёртка над aiogram Bot.

    Bot создаётся лениво при первой отправке: пустой или кривой
    токен не должен ронять приложение на старте.
    """

    def __init__(self, token: str):
        self.token = token
        self._bot: Optional[Bot] = None

    def _get_bot(self) -> Bot:
        if self._bot is None:
            self._bot = Bot(token=self.token)
        return self._bot

    async def send_message(self, chat_id: int, text: str):
        if not self.token:
            logger.warning(
                "bot_token_missing",
                chat_id=chat_id,
                message="⚠️ TELEGRAM_BOT_TOKEN не установлен, сообщение не отправлено"
            )
            return

        try:
            await self._get_bot().send_message(chat_id=chat_id, text=text)
            logger.info("telegram_message_sent", chat_id=chat_id)
        except Exception as e:
            logger.error(
                "telegram_send_failed",
                chat_id=chat_id,
                error=str(e),
                error_type=type(e).__name__
            )

    async def close(self):
        if self._bot is not None:
            await self._bot.session.close()
            logger.info("bot_session_closed", message="✅ Сессия бота закрыта")
