# infrastructure/database/base.py
"""
🗄️ ПОДКЛЮЧЕНИЕ К БД

Здесь нет глобального engine: его создают явно (в lifespan приложения)
и передают дальше. Так в тестах можно подсунуть свою фабрику сессий.
"""

import re

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

import structlog

from config.settings import Settings
from infrastructure.database.models import Base

logger = structlog.get_logger()

# Имя канала попадает прямо в текст функции триггера
CHANNEL_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def create_engine(settings: Settings) -> AsyncEngine:
    """Создаёт async engine (asyncpg) по настройкам."""
    if not settings.database_url:
        logger.warning("database_url_missing", message="⚠️ DATABASE_URL не установлен в .env")

    return create_async_engine(
        settings.async_database_url,
        echo=settings.debug,
        pool_pre_ping=True,
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, expire_on_commit=False)


# ==========================================
# ТРИГГЕР ДЛЯ LIVE UPDATE
# ==========================================

def change_trigger_statements(channel: str) -> list:
    """
    SQL для триггера, который шлёт pg_notify на каждое изменение orders.

    Payload: {"type": "INSERT|UPDATE|DELETE", "record": <строка>}
    Для DELETE в record лежит удалённая строка (OLD).
    """
    if not CHANNEL_NAME.fullmatch(channel):
        raise ValueError(f"Недопустимое имя канала: {channel!r}")

    return [
        f"""
        CREATE OR REPLACE FUNCTION notify_orders_change() RETURNS trigger AS $$
        BEGIN
            PERFORM pg_notify(
                '{channel}',
                json_build_object(
                    'type', TG_OP,
                    'record', CASE WHEN TG_OP = 'DELETE' THEN row_to_json(OLD) ELSE row_to_json(NEW) END
                )::text
            );
            RETURN NULL;
        END;
        $$ LANGUAGE plpgsql
        """,
        "DROP TRIGGER IF EXISTS orders_changes ON orders",
        """
        CREATE TRIGGER orders_changes
        AFTER INSERT OR UPDATE OR DELETE ON orders
        FOR EACH ROW EXECUTE FUNCTION notify_orders_change()
        """,
    ]


async def init_db(engine: AsyncEngine, channel: str):
    """
    Готовит базу для дашборда.

    1. Создаёт таблицы если их нет
    2. Ставит триггер pg_notify на orders
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        for statement in change_trigger_statements(channel):
            await conn.execute(text(statement))

    logger.info("database_initialized", channel=channel)


async def close_db(engine: AsyncEngine):
    await engine.dispose()
    logger.info("database_closed", message="✅ База данных закрыта")
