# app/dashboard/page.py
"""
HTML страницы дашборда.

Вся отрисовка на сервере: GET / отдаёт страницу с заглушкой,
потом /events шлёт готовый HTML блока #dashboard на каждое состояние,
скрипт на странице только подставляет его.
"""

from html import escape
from typing import Optional

from app.models import DashboardState, DashboardStatus, Order, OrderStatus

UNKNOWN_CUSTOMER = "Unknown"
LOADING_TEXT = "Yuklanmoqda..."
EMPTY_TEXT = "Заказов нет"

STATUS_COLORS = {
    OrderStatus.PENDING: "#fbbf24",
    OrderStatus.COMPLETED: "#10b981",
    OrderStatus.CANCELLED: "#ef4444",
}


def render_order_card(order: Order) -> str:
    name = order.customer.name if order.customer and order.customer.name else UNKNOWN_CUSTOMER
    phone = order.customer.phone if order.customer and order.customer.phone else ""

    description = ""
    if order.description:
        description = f'<div class="order-description">{escape(order.description)}</div>'

    return (
        '<div class="order-card">'
        '<div class="order-header">'
        '<div class="order-customer">'
        f"<strong>{escape(name)}</strong>"
        f'<span class="order-phone">{escape(phone)}</span>'
        "</div>"
        f'<span class="order-status" style="background-color: {STATUS_COLORS[order.status]}">'
        f"{order.status.value}</span>"
        "</div>"
        '<div class="order-details">'
        f'<div class="order-amount">{order.amount_text} сум</div>'
        f'<div class="order-time">{order.created_at.strftime("%d.%m.%Y, %H:%M:%S")}</div>'
        "</div>"
        f"{description}"
        "</div>"
    )


def render_body(state: DashboardState) -> str:
    if state.status == DashboardStatus.LOADING:
        return f'<div class="loading">{LOADING_TEXT}</div>'

    stats = state.stats
    tiles = [
        ("", stats.total_orders if stats else 0, "Всего заказов"),
        ("", stats.total_customers if stats else 0, "Клиентов"),
        (" pending", stats.pending_orders if stats else 0, "В ожидании"),
        (" completed", stats.completed_orders if stats else 0, "Выполнено"),
    ]
    tiles_html = "".join(
        f'<div class="stat-card{modifier}">'
        f'<div class="stat-value">{value}</div>'
        f'<div class="stat-label">{label}</div>'
        "</div>"
        for modifier, value, label in tiles
    )

    if state.orders:
        orders_html = "".join(render_order_card(order) for order in state.orders)
    else:
        orders_html = f'<div class="empty-state">{EMPTY_TEXT}</div>'

    return (
        f'<div class="stats-grid">{tiles_html}</div>'
        '<div class="orders-section">'
        "<h2>Недавние заказы</h2>"
        f'<div class="orders-list">{orders_html}</div>'
        "</div>"
    )


def render_dashboard_page(state: Optional[DashboardState] = None) -> str:
    state = state or DashboardState()
    return PAGE_TEMPLATE.replace("__BODY__", render_body(state))


PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="ru">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Заказы на Реал-тайм</title>
<style>
  body { font-family: -apple-system, "Segoe UI", Roboto, sans-serif; background: #f3f4f6; margin: 0; color: #111827; }
  .app { max-width: 960px; margin: 0 auto; padding: 24px; }
  .header h1 { margin: 0; }
  .subtitle { color: #6b7280; margin-top: 4px; }
  .loading { padding: 48px; text-align: center; color: #6b7280; }
  .stats-grid { display: grid; grid-template-columns: repeat(4, 1fr); gap: 16px; margin: 24px 0; }
  .stat-card { background: #fff; border-radius: 12px; padding: 16px; box-shadow: 0 1px 3px rgba(0,0,0,.08); }
  .stat-card.pending { border-top: 4px solid #fbbf24; }
  .stat-card.completed { border-top: 4px solid #10b981; }
  .stat-value { font-size: 28px; font-weight: 700; }
  .stat-label { color: #6b7280; }
  .order-card { background: #fff; border-radius: 12px; padding: 16px; margin-bottom: 12px; }
  .order-header, .order-details { display: flex; justify-content: space-between; align-items: center; }
  .order-phone { margin-left: 8px; color: #6b7280; }
  .order-status { color: #fff; border-radius: 999px; padding: 2px 10px; font-size: 12px; }
  .order-details { margin-top: 8px; color: #374151; }
  .order-description { margin-top: 8px; color: #6b7280; }
  .empty-state { color: #6b7280; padding: 24px; text-align: center; }
  .info-box { background: #eef2ff; border-radius: 12px; padding: 16px; margin-top: 24px; }
</style>
</head>
<body>
<div class="app">
  <header class="header">
    <h1>Заказы на Реал-тайм</h1>
    <p class="subtitle">Бот статистика и мониторинг</p>
  </header>
  <div id="dashboard">__BODY__</div>
  <div class="info-box">
    <h3>Telegram бот интеграция</h3>
    <p>Отправьте ваш Telegram bot token в переменную окружения <code>TELEGRAM_BOT_TOKEN</code></p>
    <p>Бот автоматически будет отслеживать заказы и обновлять статистику в реальном времени</p>
  </div>
</div>
<script>
  // HTML приходит уже готовый с сервера, здесь только подмена блока
  const source = new EventSource("/events");
  source.addEventListener("render", (event) => {
    document.getElementById("dashboard").innerHTML = event.data;
  });
</script>
</body>
</html>
"""
