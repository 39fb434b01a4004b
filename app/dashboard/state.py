# app/dashboard/state.py
"""
Чистые функции слияния состояния дашборда.

Состояние не меняется на месте: каждая функция возвращает новое.
"""

from typing import List

from app.models import DashboardState, DashboardStatus, Order, OrderStatus, Stats

# Сколько последних заказов держим в списке
MAX_ORDERS = 10


def mark_ready(state: DashboardState, stats: Stats, orders: List[Order]) -> DashboardState:
    """loading -> ready с загруженными данными."""
    return state.model_copy(update={
        "status": DashboardStatus.READY,
        "stats": stats,
        "orders": list(orders)[:MAX_ORDERS],
    })


def patch_stats(stats: Stats, order: Order) -> Stats:
    """
    Грубая поправка статистики по событию из канала.

    total_orders +1 всегда, pending_orders +1 только для pending.
    completed/cancelled не трогаем, поэтому счётчики со временем
    расходятся с базой (обновления заказов тоже считаются как новые).
    """
    pending = stats.pending_orders
    if order.status == OrderStatus.PENDING:
        pending += 1

    return stats.model_copy(update={
        "total_orders": stats.total_orders + 1,
        "pending_orders": pending,
    })


def apply_order(state: DashboardState, order: Order) -> DashboardState:
    """Кладёт заказ в начало списка (максимум MAX_ORDERS) и правит статистику."""
    stats = state.stats
    if stats is not None:
        stats = patch_stats(stats, order)

    return state.model_copy(update={
        "orders": [order, *state.orders][:MAX_ORDERS],
        "stats": stats,
    })
