# infrastructure/database/repositories.py
"""
Клиент запросов и подписок к базе заказов.

Вместо того чтобы писать:
    session.execute(select(...))
везде в коде, мы создаем методы:
    await client.get_stats()
    await client.get_recent_orders(10)

Клиента создают явно и передают в дашборд и в бота.
Ошибки базы не вылетают наружу: логируем и отдаём 0 / пустой список.
"""

import asyncio
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

import structlog

from app.models import Order, OrderStatus, Stats
from infrastructure.database.change_feed import OrderChangeFeed, OrderSubscription
from infrastructure.database.models import CustomerRecord, OrderRecord

logger = structlog.get_logger()

# Ошибки соединения asyncpg иногда прилетают как голый OSError
DATABASE_ERRORS = (SQLAlchemyError, OSError)


# ==========================================
# ЗАПРОСЫ
# ==========================================

def count_orders_query(status: Optional[OrderStatus] = None):
    stmt = select(func.count()).select_from(OrderRecord)
    if status:
        stmt = stmt.where(OrderRecord.status == status.value)
    return stmt


def count_customers_query():
    return select(func.count()).select_from(CustomerRecord)


def recent_orders_query(limit: int):
    """
    SELECT orders.*, customers.name, customers.phone
    FROM orders LEFT OUTER JOIN customers ON customers.id = orders.customer_id
    ORDER BY orders.created_at DESC
    LIMIT :limit
    """
    return (
        select(OrderRecord, CustomerRecord.name, CustomerRecord.phone)
        .outerjoin(CustomerRecord, OrderRecord.customer_id == CustomerRecord.id)
        .order_by(OrderRecord.created_at.desc())
        .limit(limit)
    )


# ==========================================
# КЛИЕНТ
# ==========================================

class OrdersClient:
    """
    Чтение заказов/клиентов + подписка на изменения orders.

    Пример:
        client = OrdersClient(session_maker, change_feed)
        stats = await client.get_stats()
        orders = await client.get_recent_orders(limit=5)
    """

    def __init__(
        self,
        session_maker: async_sessionmaker,
        change_feed: Optional[OrderChangeFeed] = None
    ):
        self.session_maker = session_maker
        self.change_feed = change_feed

    async def _count(self, stmt, name: str) -> int:
        # Каждый запрос в своей сессии: одна AsyncSession не умеет
        # выполнять запросы параллельно
        try:
            async with self.session_maker() as session:
                result = await session.execute(stmt)
                return result.scalar() or 0
        except DATABASE_ERRORS as e:
            logger.error("count_query_failed", query=name, error=str(e))
            return 0

    async def get_stats(self) -> Stats:
        """
        Четыре count-запроса параллельно:
        все заказы, все клиенты, pending, completed.

        NULL / ошибка -> 0.
        """
        total_orders, total_customers, pending, completed = await asyncio.gather(
            self._count(count_orders_query(), "orders"),
            self._count(count_customers_query(), "customers"),
            self._count(count_orders_query(OrderStatus.PENDING), "pending_orders"),
            self._count(count_orders_query(OrderStatus.COMPLETED), "completed_orders"),
        )

        return Stats(
            total_orders=total_orders,
            total_customers=total_customers,
            pending_orders=pending,
            completed_orders=completed,
        )

    async def get_recent_orders(self, limit: int = 10) -> List[Order]:
        """
        Последние limit заказов (новые сверху) с именем и телефоном клиента.

        Ошибка базы -> пишем в лог и возвращаем [].
        Строка неправильной формы -> ValidationError (не глотаем).
        """
        try:
            async with self.session_maker() as session:
                result = await session.execute(recent_orders_query(limit))
                rows = result.all()
        except DATABASE_ERRORS as e:
            logger.error("orders_fetch_failed", limit=limit, error=str(e))
            return []

        return [Order.from_row(record, name, phone) for record, name, phone in rows]

    def subscribe_to_orders(self) -> OrderSubscription:
        """
        Подписка на все INSERT/UPDATE/DELETE в orders.

        Обязательно вызвать unsubscribe() (или использовать async with),
        иначе канал не освободится.
        """
        if self.change_feed is None:
            raise RuntimeError("Change feed is not configured for this client")

        return self.change_feed.subscribe()
