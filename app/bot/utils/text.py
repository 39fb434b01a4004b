# app/bot/utils/text.py
"""Тексты ответов бота."""

from typing import List

from app.models import Order, Stats

UNKNOWN_CUSTOMER = "Unknown"

NO_ORDERS_TEXT = "Заказлар йўқ"
UNKNOWN_COMMAND_TEXT = "Буни манени тушунмадим. /start ни сўра"


def start_text(first_name: str) -> str:
    return (
        f"Салом {first_name}! 👋\n\n"
        "Бот статистика:\n"
        "/stats - Заказ статистика\n"
        "/orders - Йўқори заказлар"
    )


def stats_text(stats: Stats) -> str:
    """
    Сводка из трёх строк.

    Пример (12 заказов, 5 клиентов, 3 ждут):
        📊 Заказ Статистика:

        ✅ Умумий заказлар: 12
        👥 Умумий мижозлар: 5
        ⏳ Кутиётирган заказлар: 3
    """
    return (
        "📊 Заказ Статистика:\n\n"
        f"✅ Умумий заказлар: {stats.total_orders}\n"
        f"👥 Умумий мижозлар: {stats.total_customers}\n"
        f"⏳ Кутиётирган заказлар: {stats.pending_orders}"
    )


def order_line(index: int, order: Order) -> str:
    name = order.customer.name if order.customer and order.customer.name else UNKNOWN_CUSTOMER
    return f"{index}. {name} - {order.amount_text} сум ({order.status.value})\n"


def orders_text(orders: List[Order]) -> str:
    """Нумерованный список с 1, или "Заказлар йўқ" если пусто."""
    if not orders:
        return NO_ORDERS_TEXT

    text = "📋 Охирги заказлар:\n\n"
    for index, order in enumerate(orders, start=1):
        text += order_line(index, order)
    return text
