# app/bot/utils/__init__.py
"""Инициализация утилит."""

from .text import (
    NO_ORDERS_TEXT,
    UNKNOWN_COMMAND_TEXT,
    orders_text,
    start_text,
    stats_text,
)

__all__ = [
    "NO_ORDERS_TEXT",
    "UNKNOWN_COMMAND_TEXT",
    "orders_text",
    "start_text",
    "stats_text",
]
