# app/models.py
"""
📊 МОДЕЛИ ДАННЫХ (pydantic)

Всё, что приходит из базы (строки запросов и уведомления об изменениях),
проходит через эти модели. Если форма данных не совпала (например,
неизвестный статус) - pydantic бросает ValidationError, молча ничего
не подменяем.
"""

import json
from datetime import datetime
from decimal import Decimal
from enum import Enum as PyEnum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_serializer


# ==========================================
# ENUMS
# ==========================================

class OrderStatus(str, PyEnum):
    """Статусы заказа."""
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ChangeType(str, PyEnum):
    """Тип изменения строки в таблице orders."""
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


# ==========================================
# CUSTOMER
# ==========================================

class CustomerSummary(BaseModel):
    """Имя и телефон клиента, подтянутые к заказу через join."""
    name: str
    phone: Optional[str] = None


# ==========================================
# ORDER
# ==========================================

class Order(BaseModel):
    """
    Заказ.

    Создаётся где-то снаружи, мы его только читаем.
    customer есть только у заказов из get_recent_orders (там join),
    у заказов из канала изменений его нет.
    """
    id: str
    customer_id: Optional[str] = None
    amount: Decimal
    status: OrderStatus
    description: Optional[str] = None
    created_at: datetime
    customer: Optional[CustomerSummary] = None

    @property
    def amount_text(self) -> str:
        """150000.00 -> "150000", 12.50 -> "12.5" """
        return format(self.amount.normalize(), "f")

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, amount: Decimal) -> float:
        return float(amount)

    @classmethod
    def from_row(cls, record: Any, name: Optional[str] = None, phone: Optional[str] = None) -> "Order":
        """
        Собирает заказ из строки SELECT orders LEFT JOIN customers.

        Если клиента нет (join вернул NULL) - customer = None.
        """
        customer = None
        if name is not None:
            customer = {"name": name, "phone": phone}

        return cls.model_validate({
            "id": str(record.id),
            "customer_id": str(record.customer_id) if record.customer_id is not None else None,
            "amount": record.amount,
            "status": record.status,
            "description": record.description,
            "created_at": record.created_at,
            "customer": customer,
        })


# ==========================================
# STATS
# ==========================================

class Stats(BaseModel):
    """Агрегаты для дашборда. В базе не хранятся, считаются запросами."""
    total_orders: int = 0
    total_customers: int = 0
    pending_orders: int = 0
    completed_orders: int = 0


# ==========================================
# ИЗМЕНЕНИЯ (live update канал)
# ==========================================

class OrderChange(BaseModel):
    """
    Одно событие из канала изменений таблицы orders.

    record = новая строка (для DELETE - удалённая).
    """
    type: ChangeType
    record: Order

    @classmethod
    def from_payload(cls, payload: str) -> "OrderChange":
        """
        Разбирает payload уведомления pg_notify.

        Пример:
            {"type": "INSERT", "record": {"id": "...", "amount": 150000, ...}}
        """
        return cls.model_validate(json.loads(payload))


class DashboardStatus(str, PyEnum):
    LOADING = "loading"
    READY = "ready"


class DashboardState(BaseModel):
    """Состояние дашборда: loading -> ready."""
    status: DashboardStatus = DashboardStatus.LOADING
    stats: Optional[Stats] = None
    orders: List[Order] = Field(default_factory=list)
