# app/api/webhooks/telegram.py
"""
Вебхук от Telegram.

Telegram присылает POST на каждое входящее сообщение.
Один запрос = один апдейт, никакого состояния между запросами.

Ответы:
- OPTIONS -> 200 + CORS заголовки
- POST    -> 200 {"ok": true}, даже если команда упала
             или апдейт пришёл не той формы
- POST с телом, которое не JSON -> 500 {"error": "Internal server error"}
"""

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError
import structlog

from app.api.dependencies import get_orders_client, get_sender
from app.bot.handlers.commands import handle_telegram_update
from app.bot.services.notifications import TelegramSender
from app.bot.types import TelegramUpdate
from infrastructure.database.repositories import OrdersClient

logger = structlog.get_logger()
router = APIRouter(prefix="/webhook")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Client-Info, Apikey",
}


@router.options("/telegram")
async def telegram_preflight():
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/telegram")
async def handle_telegram_webhook(
    request: Request,
    client: OrdersClient = Depends(get_orders_client),
    sender: TelegramSender = Depends(get_sender)
):
    try:
        payload = await request.json()
    except Exception as e:
        logger.error(
            "webhook_error",
            error=str(e),
            error_type=type(e).__name__
        )
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
            headers=CORS_HEADERS
        )

    # Кривой апдейт - это ошибка обработки, а не тела:
    # на не-2xx Telegram будет слать его снова
    try:
        update = TelegramUpdate.model_validate(payload)
    except ValidationError as e:
        logger.error(
            "update_handling_error",
            error=str(e),
            error_type=type(e).__name__
        )
    else:
        await handle_telegram_update(update, client=client, sender=sender)

    return JSONResponse({"ok": True}, headers=CORS_HEADERS)
