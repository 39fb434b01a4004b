# infrastructure/database/models.py
"""
Здесь мы описываем структуру таблиц в базе данных.

Схема принадлежит управляемому Postgres: таблицы заполняет кто-то
снаружи, мы их только читаем. create_all при старте дашборда
создаст их только если их ещё нет (удобно для локальной разработки).

Каждый класс = одна таблица в БД
"""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Numeric,
    String,
    Text,
    Uuid,
    func,
)

from sqlalchemy.orm import declarative_base, relationship


# Base — базовый класс для всех моделей
Base = declarative_base()


# ==========================================
# МОДЕЛЬ: Customer (Таблица customers)
# ==========================================

class CustomerRecord(Base):
    """
    Таблица клиентов.

    id | name | phone         | created_at
    .. | Ali  | +998901234567 | 2024-01-21 10:00:00+05
    """
    __tablename__ = "customers"

    id = Column(
        Uuid(as_uuid=False),
        primary_key=True,
        server_default=func.gen_random_uuid()
    )

    name = Column(Text, nullable=False)

    phone = Column(Text)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now()
    )

    orders = relationship("OrderRecord", back_populates="customer")


# ==========================================
# МОДЕЛЬ: Order (Таблица orders)
# ==========================================

class OrderRecord(Base):
    """
    Таблица заказов.

    id | customer_id | amount    | status  | description | created_at
    .. | ..          | 150000.00 | pending | Плов x2     | 2024-01-21 10:05:00+05
    """
    __tablename__ = "orders"

    id = Column(
        Uuid(as_uuid=False),
        primary_key=True,
        server_default=func.gen_random_uuid()
    )

    customer_id = Column(
        Uuid(as_uuid=False),
        ForeignKey("customers.id"),
        index=True
    )

    amount = Column(Numeric(12, 2), nullable=False)

    status = Column(
        String,
        nullable=False,
        default="pending",
        index=True  # фильтруем по статусу в статистике
    )
    # pending / completed / cancelled

    description = Column(Text)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        index=True  # сортируем по дате
    )

    customer = relationship("CustomerRecord", back_populates="orders")
