"""Дашборд заказов: состояние, сессия, HTML."""

from app.dashboard.session import DashboardSession
from app.dashboard.state import MAX_ORDERS, apply_order, mark_ready, patch_stats

__all__ = ["DashboardSession", "MAX_ORDERS", "apply_order", "mark_ready", "patch_stats"]
