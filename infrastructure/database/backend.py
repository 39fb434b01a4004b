# infrastructure/database/backend.py
"""
Жизненный цикл подключения к базе для одного процесса.

Дашборду нужен канал изменений (LISTEN), боту - только запросы.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
import structlog

from config.settings import Settings
from infrastructure.database.base import close_db, create_engine, create_session_maker, init_db
from infrastructure.database.change_feed import OrderChangeFeed
from infrastructure.database.repositories import OrdersClient

logger = structlog.get_logger()


@asynccontextmanager
async def open_orders_client(settings: Settings, live_updates: bool = False) -> AsyncIterator[OrdersClient]:
    """
    Создаёт engine + OrdersClient, а на выходе всё закрывает.

    live_updates=True:
    - ставим триггер pg_notify (init_db)
    - запускаем OrderChangeFeed

    Ошибки инициализации не роняют приложение: запросы потом
    просто вернут 0 / [] и запишут ошибку в лог.
    """
    engine = create_engine(settings)
    feed = None

    if live_updates:
        try:
            await init_db(engine, settings.orders_channel)
        except (SQLAlchemyError, OSError) as e:
            logger.error("database_init_failed", error=str(e))

        feed = OrderChangeFeed(settings.listen_dsn, settings.orders_channel)
        await feed.start()

    try:
        yield OrdersClient(create_session_maker(engine), feed)
    finally:
        if feed is not None:
            await feed.stop()
        await close_db(engine)
