# app/api/dashboard.py
"""
🌐 ДАШБОРД: страница, SSE поток и JSON ручки.

GET /              - HTML страница
GET /events        - Server-Sent Events: снимок состояния (JSON)
                     и готовый HTML блока дашборда (event: render)
GET /api/stats     - статистика
GET /api/orders    - последние заказы
GET /api/dashboard - загрузка целиком (stats + orders)
"""

from contextlib import aclosing
from typing import List

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, StreamingResponse
import structlog

from app.api.dependencies import get_orders_client, get_recent_limit
from app.dashboard.page import render_body, render_dashboard_page
from app.dashboard.session import DashboardSession
from app.models import DashboardState, Order, Stats
from infrastructure.database.repositories import OrdersClient

logger = structlog.get_logger()
router = APIRouter()


def state_event(state: DashboardState) -> str:
    """
    Два SSE сообщения на одно состояние.

    data: {"status": "ready", ...}

    event: render
    data: <div class="stats-grid">...
    """
    fragment = "".join(f"data: {line}\n" for line in render_body(state).splitlines())
    return f"data: {state.model_dump_json()}\n\nevent: render\n{fragment}\n"


@router.get("/", response_class=HTMLResponse)
async def dashboard_page():
    """Страница открывается сразу с заглушкой, данные придут через /events."""
    return HTMLResponse(render_dashboard_page())


@router.get("/events")
async def dashboard_events(
    client: OrdersClient = Depends(get_orders_client),
    limit: int = Depends(get_recent_limit)
):
    session = DashboardSession(client, limit=limit)

    async def event_stream():
        logger.info("dashboard_connected")
        try:
            async with aclosing(session.stream()) as states:
                async for state in states:
                    yield state_event(state)
        finally:
            logger.info("dashboard_disconnected")

    return StreamingResponse(event_stream(), media_type="text/event-stream")


@router.get("/api/stats", response_model=Stats)
async def stats(client: OrdersClient = Depends(get_orders_client)):
    return await client.get_stats()


@router.get("/api/orders", response_model=List[Order])
async def recent_orders(
    limit: int = Query(10, ge=1, le=100),
    client: OrdersClient = Depends(get_orders_client)
):
    return await client.get_recent_orders(limit)


@router.get("/api/dashboard", response_model=DashboardState)
async def dashboard_snapshot(
    client: OrdersClient = Depends(get_orders_client),
    limit: int = Depends(get_recent_limit)
):
    return await DashboardSession(client, limit=limit).load()
