# infrastructure/database/__init__.py
"""
🗄️ DATABASE

Экспортируем все нужные функции и объекты.
"""

from infrastructure.database.base import (
    create_engine,
    create_session_maker,
    init_db,
    close_db,
)
from infrastructure.database.change_feed import OrderChangeFeed, OrderSubscription
from infrastructure.database.repositories import OrdersClient

__all__ = [
    "create_engine",
    "create_session_maker",
    "init_db",
    "close_db",
    "OrderChangeFeed",
    "OrderSubscription",
    "OrdersClient",
]
