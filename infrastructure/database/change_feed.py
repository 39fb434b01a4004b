# infrastructure/database/change_feed.py
"""
🔔 КАНАЛ ИЗМЕНЕНИЙ ЗАКАЗОВ (live update)

Одно соединение asyncpg делает LISTEN на канал, куда триггер
на таблице orders шлёт pg_notify. Каждое уведомление разбирается
в OrderChange и раздаётся всем подписчикам.

У каждого подписчика своя неограниченная очередь: без фильтрации,
без дедупликации, события приходят так быстро, как их шлёт база.

Пример:
    async with feed.subscribe() as subscription:
        async for change in subscription:
            print(change.type, change.record.id)
"""

import asyncio
from typing import List, Optional

import asyncpg
import structlog

from app.models import OrderChange

logger = structlog.get_logger()

_CLOSED = object()


# ==========================================
# ПОДПИСКА
# ==========================================

class OrderSubscription:
    """
    Поток событий OrderChange для одного подписчика.

    unsubscribe() освобождает канал ровно один раз,
    повторные вызовы ничего не делают.
    """

    def __init__(self, feed: "OrderChangeFeed"):
        self._feed = feed
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def put(self, change: OrderChange):
        if not self._closed:
            self._queue.put_nowait(change)

    def unsubscribe(self):
        if self._closed:
            return
        self._closed = True
        self._feed._remove(self)
        # будим того, кто ждёт в __anext__
        self._queue.put_nowait(_CLOSED)

    def __aiter__(self):
        return self

    async def __anext__(self) -> OrderChange:
        if self._closed and self._queue.empty():
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        return item

    async def __aenter__(self) -> "OrderSubscription":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.unsubscribe()


# ==========================================
# FEED
# ==========================================

class OrderChangeFeed:
    """
    LISTEN на канал изменений + раздача подписчикам.

    start()/stop() управляют соединением. Если подключиться не вышло -
    пишем в лог и живём дальше: подписки просто не получат событий.
    """

    def __init__(self, dsn: str, channel: str = "orders_changes"):
        self.dsn = dsn
        self.channel = channel
        self._connection: Optional[asyncpg.Connection] = None
        self._subscribers: List[OrderSubscription] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    async def start(self):
        try:
            self._connection = await asyncpg.connect(self.dsn)
            await self._connection.add_listener(self.channel, self._on_notify)
        except (asyncpg.PostgresError, asyncpg.InterfaceError, asyncio.TimeoutError, OSError) as e:
            logger.error("change_feed_start_failed", channel=self.channel, error=str(e))
            self._connection = None
            return

        logger.info("change_feed_started", channel=self.channel)

    async def stop(self):
        for subscription in list(self._subscribers):
            subscription.unsubscribe()

        if self._connection is None:
            return

        try:
            await self._connection.remove_listener(self.channel, self._on_notify)
            await self._connection.close()
        finally:
            self._connection = None
            logger.info("change_feed_stopped", channel=self.channel)

    def subscribe(self) -> OrderSubscription:
        subscription = OrderSubscription(self)
        self._subscribers.append(subscription)
        logger.debug("order_subscription_opened", subscribers=self.subscriber_count)
        return subscription

    def publish(self, change: OrderChange):
        """Раздаёт событие всем текущим подписчикам."""
        for subscription in list(self._subscribers):
            subscription.put(change)

    def _remove(self, subscription: OrderSubscription):
        if subscription in self._subscribers:
            self._subscribers.remove(subscription)
            logger.debug("order_subscription_closed", subscribers=self.subscriber_count)

    def _on_notify(self, connection, pid, channel, payload):
        try:
            change = OrderChange.from_payload(payload)
        except ValueError as e:
            # ValidationError тоже ValueError
            logger.error("order_change_invalid", channel=channel, error=str(e), payload=payload[:200])
            return

        logger.info("order_change_received", type=change.type.value, order_id=change.record.id)
        self.publish(change)
