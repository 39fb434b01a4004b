# app/api/dependencies.py
"""
Зависимости FastAPI.

Клиент базы и отправщик живут в app.state: их кладёт туда
lifespan, либо тест при создании приложения.
"""

from fastapi import Request

from app.bot.services.notifications import TelegramSender
from infrastructure.database.repositories import OrdersClient


def get_orders_client(request: Request) -> OrdersClient:
    return request.app.state.orders_client


def get_sender(request: Request) -> TelegramSender:
    return request.app.state.sender


def get_recent_limit(request: Request) -> int:
    return request.app.state.recent_orders_limit
