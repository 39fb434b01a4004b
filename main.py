# main.py
"""
🚀 ГЛАВНЫЙ ФАЙЛ ЗАПУСКА

Команда для запуска:
    python main.py              # дашборд + вебхук бота
    python main.py dashboard    # только дашборд
    python main.py webhook      # только вебхук бота
"""

import argparse
import asyncio

import structlog
import uvicorn

from app.api.app import create_dashboard_app, create_webhook_app
from config.settings import config
from infrastructure.logger import setup_logging

logger = structlog.get_logger()

SERVICES = ("dashboard", "webhook", "all")


async def serve(app, port: int, name: str):
    """Запуск одного uvicorn сервера."""
    server = uvicorn.Server(uvicorn.Config(
        app,
        host=config.api_host,
        port=port,
        log_level="debug" if config.debug else "info",
        access_log=True,
    ))
    logger.info(
        "server_starting",
        service=name,
        message=f"🌐 {name} запускается на {config.api_host}:{port}"
    )
    await server.serve()


async def main(service: str = "all"):
    setup_logging(config.debug)
    logger.info("application_start", service=service, environment=config.environment)

    if not config.telegram_bot_token and service != "dashboard":
        logger.warning("bot_token_missing", message="⚠️ TELEGRAM_BOT_TOKEN не установлен в .env")

    servers = []
    if service in ("dashboard", "all"):
        servers.append(serve(create_dashboard_app(config), config.dashboard_port, "dashboard"))
    if service in ("webhook", "all"):
        servers.append(serve(create_webhook_app(config), config.webhook_port, "webhook"))

    # Если один упадёт, упадут оба
    await asyncio.gather(*servers)


def run():
    parser = argparse.ArgumentParser(description="Дашборд заказов и вебхук Telegram бота")
    parser.add_argument("service", nargs="?", choices=SERVICES, default="all")
    args = parser.parse_args()

    try:
        asyncio.run(main(args.service))
    except KeyboardInterrupt:
        logger.info("app_interrupted", message="⛔ Приложение остановлено пользователем (Ctrl+C)")
    finally:
        logger.info("app_final_shutdown", message="👋 Приложение полностью выключено")


if __name__ == "__main__":
    run()
