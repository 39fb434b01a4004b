# app/bot/types.py
"""
Pydantic модели для входящего апдейта от Telegram.

Telegram шлёт много полей, нам нужны единицы, остальное
пропускаем (extra = "allow").
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TelegramUser(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    first_name: str = ""
    username: Optional[str] = None


class TelegramContact(BaseModel):
    model_config = ConfigDict(extra="allow")

    phone_number: str


class TelegramMessage(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    message_id: Optional[int] = None
    from_user: TelegramUser = Field(alias="from")
    text: Optional[str] = None
    contact: Optional[TelegramContact] = None


class TelegramCallbackQuery(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    from_user: TelegramUser = Field(alias="from")
    data: Optional[str] = None


class TelegramUpdate(BaseModel):
    """
    Апдейт от Telegram.

    Пример:
        {"update_id": 1, "message": {"from": {"id": 42, "first_name": "Ali"}, "text": "/stats"}}
    """
    model_config = ConfigDict(extra="allow")

    update_id: int
    message: Optional[TelegramMessage] = None
    callback_query: Optional[TelegramCallbackQuery] = None
