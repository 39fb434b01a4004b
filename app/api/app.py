# app/api/app.py
"""
FastAPI приложения.

Два независимых процесса:
- дашборд (страница + live update через SSE)
- вебхук Telegram бота

Если зависимости переданы в фабрику (например, в тестах),
lifespan ничего не создаёт и ничего не закрывает.
"""

from contextlib import AsyncExitStack, asynccontextmanager
from typing import Optional

from fastapi import FastAPI
import structlog

from app.api.dashboard import router as dashboard_router
from app.api.webhooks.telegram import router as telegram_router
from app.bot.services.notifications import TelegramSender
from config.settings import Settings, config
from infrastructure.database.backend import open_orders_client
from infrastructure.database.repositories import OrdersClient

logger = structlog.get_logger()


def add_health_check(app: FastAPI, service: str):
    @app.get("/health")
    async def health_check():
        """Проверка что приложение живо (Docker, Kubernetes и т.д.)."""
        return {
            "status": "ok",
            "service": service
        }


# ==========================================
# ДАШБОРД
# ==========================================

def create_dashboard_app(
    settings: Settings = config,
    orders_client: Optional[OrdersClient] = None
) -> FastAPI:

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("app_startup", service="dashboard", message="🟢 Запуск дашборда")

        async with AsyncExitStack() as stack:
            if app.state.orders_client is None:
                app.state.orders_client = await stack.enter_async_context(
                    open_orders_client(settings, live_updates=True)
                )
            yield

        logger.info("app_shutdown", service="dashboard", message="🔴 Дашборд выключен")

    app = FastAPI(
        title="Orders Dashboard",
        description="Статистика заказов в реальном времени",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.orders_client = orders_client
    app.state.recent_orders_limit = settings.recent_orders_limit

    app.include_router(dashboard_router)
    add_health_check(app, "dashboard")

    return app


# ==========================================
# ВЕБХУК БОТА
# ==========================================

def create_webhook_app(
    settings: Settings = config,
    orders_client: Optional[OrdersClient] = None,
    sender: Optional[TelegramSender] = None
) -> FastAPI:

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("app_startup", service="webhook", message="🟢 Запуск вебхука бота")

        async with AsyncExitStack() as stack:
            if app.state.orders_client is None:
                app.state.orders_client = await stack.enter_async_context(
                    open_orders_client(settings)
                )
            if app.state.sender is None:
                app.state.sender = TelegramSender(settings.telegram_bot_token)
                stack.push_async_callback(app.state.sender.close)
            yield

        logger.info("app_shutdown", service="webhook", message="🔴 Вебхук выключен")

    app = FastAPI(
        title="Orders Telegram Bot",
        description="Вебхук для команд /start, /stats, /orders",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.orders_client = orders_client
    app.state.sender = sender

    app.include_router(telegram_router)
    add_health_check(app, "webhook")

    return app
