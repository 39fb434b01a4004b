# config/settings.py
"""
Settings файл - здесь живут все настройки приложения.

Логика: когда приложение запускается, оно читает .env файл
и создает объект 'config' со всеми необходимыми значениями.

Секреты (URL базы, ключ сервиса, токен бота) по умолчанию пустые:
если их нет, приложение всё равно стартует, а запросы и отправка
сообщений просто падают с ошибкой в логах.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url
from typing import Literal

FALLBACK_DATABASE_URL = "postgresql+asyncpg://localhost/postgres"


class Settings(BaseSettings):
    """
    Основной класс настроек.

    BaseSettings читает переменные окружения и .env,
    валидирует типы (DASHBOARD_PORT должен быть int и т.д.).
    """

    # ==========================================
    # DATABASE (управляемый Postgres)
    # ==========================================
    database_url: str = ""
    database_service_key: str = ""
    orders_channel: str = "orders_changes"

    # ==========================================
    # TELEGRAM BOT
    # ==========================================
    telegram_bot_token: str = ""

    # ==========================================
    # DASHBOARD
    # ==========================================
    recent_orders_limit: int = 10

    # ==========================================
    # API
    # ==========================================
    api_host: str = "0.0.0.0"
    dashboard_port: int = 8000
    webhook_port: int = 8001

    # ==========================================
    # ENVIRONMENT
    # ==========================================
    environment: Literal["development", "production"] = "development"
    debug: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False
    )

    def _database_url(self):
        url = make_url(self.database_url or FALLBACK_DATABASE_URL)
        url = url.difference_update_query(["sslmode"])
        if self.database_service_key and not url.password:
            url = url.set(password=self.database_service_key)
        return url

    @property
    def async_database_url(self) -> str:
        """URL для SQLAlchemy в формате postgresql+asyncpg://"""
        url = self._database_url().set(drivername="postgresql+asyncpg")
        return url.render_as_string(hide_password=False)

    @property
    def listen_dsn(self) -> str:
        """DSN для asyncpg (LISTEN на канал изменений заказов)"""
        url = self._database_url().set(drivername="postgresql")
        return url.render_as_string(hide_password=False)


config = Settings()
