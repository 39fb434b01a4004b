# app/dashboard/session.py
"""
Сессия дашборда = одна открытая страница.

mount    -> подписка на канал изменений + загрузка данных
событие  -> apply_order
teardown -> отписка (ровно один раз)
"""

import asyncio
from typing import AsyncIterator

import structlog

from app.dashboard.state import MAX_ORDERS, apply_order, mark_ready
from app.models import DashboardState
from infrastructure.database.repositories import OrdersClient

logger = structlog.get_logger()


class DashboardSession:

    def __init__(self, client: OrdersClient, limit: int = MAX_ORDERS):
        self.client = client
        self.limit = limit
        self.state = DashboardState()

    async def load(self) -> DashboardState:
        """Статистика и последние заказы параллельно. Без таймаута и ретраев."""
        stats, orders = await asyncio.gather(
            self.client.get_stats(),
            self.client.get_recent_orders(self.limit),
        )
        self.state = mark_ready(self.state, stats, orders)

        logger.info(
            "dashboard_loaded",
            total_orders=stats.total_orders,
            orders=len(self.state.orders)
        )
        return self.state

    async def stream(self) -> AsyncIterator[DashboardState]:
        """
        Снимки состояния: loading, ready, затем по одному на каждое событие.

        События, пришедшие во время загрузки, лежат в очереди подписки
        и применяются сразу после перехода в ready.
        """
        async with self.client.subscribe_to_orders() as subscription:
            yield self.state

            await self.load()
            yield self.state

            async for change in subscription:
                self.state = apply_order(self.state, change.record)
                yield self.state
