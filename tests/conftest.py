"""
Pytest configuration: пути импорта, переменные окружения и фейки базы.

Настоящая база и Telegram в тестах не нужны: OrdersClient получает
фейковую фабрику сессий, бот - фейковый отправщик.
"""

import os
import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path
from typing import List, Optional

import pytest


def _ensure_repo_root_on_sys_path() -> None:
    repo_root = str(Path(__file__).resolve().parents[1])
    if repo_root not in sys.path:
        sys.path.insert(0, repo_root)


_ensure_repo_root_on_sys_path()

os.environ.setdefault("DATABASE_URL", "")
os.environ.setdefault("DATABASE_SERVICE_KEY", "")
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "")

from app.models import CustomerSummary, Order, OrderStatus, Stats  # noqa: E402
from infrastructure.database.change_feed import OrderChangeFeed  # noqa: E402


BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_order(
    index: int = 1,
    status: OrderStatus = OrderStatus.PENDING,
    amount: str = "150000.00",
    customer: Optional[str] = "Ali",
    description: Optional[str] = None,
) -> Order:
    return Order(
        id=f"00000000-0000-0000-0000-{index:012d}",
        customer_id="11111111-1111-1111-1111-111111111111" if customer else None,
        amount=Decimal(amount),
        status=status,
        description=description,
        created_at=BASE_TIME + timedelta(minutes=index),
        customer=CustomerSummary(name=customer, phone="+998901234567") if customer else None,
    )


class FakeOrdersClient:
    """Подменяет OrdersClient: отдаёт заданные stats/orders и свой change feed."""

    def __init__(self, stats: Optional[Stats] = None, orders: Optional[List[Order]] = None):
        self.stats = stats or Stats()
        self.orders = orders or []
        self.change_feed = OrderChangeFeed("postgresql://localhost/test")
        self.recent_limits: List[int] = []

    async def get_stats(self) -> Stats:
        return self.stats

    async def get_recent_orders(self, limit: int = 10) -> List[Order]:
        self.recent_limits.append(limit)
        return self.orders[:limit]

    def subscribe_to_orders(self):
        return self.change_feed.subscribe()


class FakeSender:
    def __init__(self):
        self.sent = []

    async def send_message(self, chat_id: int, text: str):
        self.sent.append((chat_id, text))

    async def close(self):
        pass


@pytest.fixture
def orders_client():
    return FakeOrdersClient()


@pytest.fixture
def sender():
    return FakeSender()
