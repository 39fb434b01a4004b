# app/bot/handlers/commands.py
"""
Команды бота: /start, /stats, /orders.

Сравнение строго по тексту: "/stats" - команда, "/stats now" - уже нет.
Всё остальное получает "не понял".

Каждый обработчик возвращает текст ответа, отправкой занимается
handle_telegram_update.
"""

from typing import Awaitable, Callable, Dict

import structlog

from app.bot.services.notifications import TelegramSender
from app.bot.types import TelegramMessage, TelegramUpdate
from app.bot.utils.text import UNKNOWN_COMMAND_TEXT, orders_text, start_text, stats_text
from infrastructure.database.repositories import OrdersClient

logger = structlog.get_logger()

# Сколько заказов показывает /orders
BOT_ORDERS_LIMIT = 5

CommandHandler = Callable[[TelegramMessage, OrdersClient], Awaitable[str]]

COMMANDS: Dict[str, CommandHandler] = {}


def command(text: str):
    """Регистрирует обработчик для точного текста команды."""
    def decorator(handler: CommandHandler) -> CommandHandler:
        COMMANDS[text] = handler
        return handler
    return decorator


# ==========================================
# КОМАНДЫ
# ==========================================

@command("/start")
async def cmd_start(message: TelegramMessage, client: OrdersClient) -> str:
    return start_text(message.from_user.first_name)


@command("/stats")
async def cmd_stats(message: TelegramMessage, client: OrdersClient) -> str:
    stats = await client.get_stats()
    return stats_text(stats)


@command("/orders")
async def cmd_orders(message: TelegramMessage, client: OrdersClient) -> str:
    orders = await client.get_recent_orders(limit=BOT_ORDERS_LIMIT)
    return orders_text(orders)


async def cmd_unknown(message: TelegramMessage, client: OrdersClient) -> str:
    return UNKNOWN_COMMAND_TEXT


# ==========================================
# ОБРАБОТКА АПДЕЙТА
# ==========================================

async def handle_telegram_update(
    update: TelegramUpdate,
    client: OrdersClient,
    sender: TelegramSender
):
    """
    Обрабатывает один апдейт.

    Работаем только с текстовыми сообщениями, остальное игнорируем.
    Любая ошибка пишется в лог и глотается: Telegram всё равно
    получит {"ok": true}.
    """
    try:
        message = update.message
        if message is None or not message.text:
            return

        logger.info(
            "message_received",
            update_id=update.update_id,
            user_id=message.from_user.id,
            username=message.from_user.username,
            text=message.text[:50]
        )

        handler = COMMANDS.get(message.text, cmd_unknown)
        reply = await handler(message, client)

        # Отвечаем в личку отправителю
        await sender.send_message(chat_id=message.from_user.id, text=reply)

    except Exception as e:
        logger.error(
            "update_handling_error",
            update_id=update.update_id,
            error=str(e),
            error_type=type(e).__name__
        )
