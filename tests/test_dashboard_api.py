import asyncio
import json

from fastapi.testclient import TestClient

from app.api.app import create_dashboard_app
from app.api.dashboard import dashboard_events, state_event
from app.dashboard.state import mark_ready
from app.models import ChangeType, CustomerSummary, DashboardState, OrderChange, OrderStatus, Stats
from conftest import FakeOrdersClient, make_order


def _client(stats=None, orders=None):
    fake = FakeOrdersClient(stats=stats, orders=orders)
    return TestClient(create_dashboard_app(orders_client=fake)), fake


def test_page_starts_with_loading_placeholder():
    client, _ = _client()
    resp = client.get("/")
    assert resp.status_code == 200
    assert "Yuklanmoqda..." in resp.text
    assert 'new EventSource("/events")' in resp.text


def test_stats_endpoint():
    client, _ = _client(stats=Stats(total_orders=12, total_customers=5, pending_orders=3, completed_orders=7))
    assert client.get("/api/stats").json() == {
        "total_orders": 12,
        "total_customers": 5,
        "pending_orders": 3,
        "completed_orders": 7,
    }


def test_orders_endpoint_passes_limit():
    client, fake = _client(orders=[make_order(i) for i in range(5, 0, -1)])
    body = client.get("/api/orders", params={"limit": 3}).json()

    assert len(body) == 3
    assert body[0]["customer"]["name"] == "Ali"
    assert fake.recent_limits == [3]


def test_orders_endpoint_rejects_bad_limit():
    client, _ = _client()
    assert client.get("/api/orders", params={"limit": 0}).status_code == 422


def test_dashboard_snapshot_is_ready():
    client, _ = _client(stats=Stats(total_orders=1), orders=[make_order(1)])
    body = client.get("/api/dashboard").json()
    assert body["status"] == "ready"
    assert body["stats"]["total_orders"] == 1
    assert len(body["orders"]) == 1


def test_health():
    client, _ = _client()
    assert client.get("/health").json() == {"status": "ok", "service": "dashboard"}


def _split(frame):
    """state frame -> (состояние из JSON, HTML из event: render)"""
    state_part, render_part, tail = frame.split("\n\n")
    assert tail == ""
    assert state_part.startswith("data: ")

    event_line, *data_lines = render_part.split("\n")
    assert event_line == "event: render"
    html = "\n".join(line[len("data: "):] for line in data_lines)
    return json.loads(state_part[len("data: "):]), html


# ==========================================
# /events
# ==========================================

def test_events_stream_lifecycle():
    async def scenario():
        fake = FakeOrdersClient(stats=Stats(total_orders=1), orders=[make_order(1)])
        response = await dashboard_events(client=fake, limit=10)
        assert response.media_type == "text/event-stream"
        frames = response.body_iterator

        state, html = _split(await frames.__anext__())
        assert state["status"] == "loading"
        assert html == '<div class="loading">Yuklanmoqda...</div>'
        assert fake.change_feed.subscriber_count == 1

        state, html = _split(await frames.__anext__())
        assert state["status"] == "ready"
        assert state["stats"]["total_orders"] == 1
        assert '<div class="stat-value">1</div>' in html

        fake.change_feed.publish(OrderChange(type=ChangeType.INSERT, record=make_order(2)))
        state, html = _split(await frames.__anext__())
        assert [order["id"] for order in state["orders"]] == [make_order(2).id, make_order(1).id]
        assert state["stats"]["total_orders"] == 2
        assert state["stats"]["pending_orders"] == 1

        # вкладку закрыли
        await frames.aclose()
        assert fake.change_feed.subscriber_count == 0

    asyncio.run(scenario())


def test_render_event_has_tiles_and_badges():
    state = mark_ready(
        DashboardState(),
        Stats(total_orders=12, total_customers=5, pending_orders=3, completed_orders=7),
        [
            make_order(3, status=OrderStatus.CANCELLED, customer=None),
            make_order(2).model_copy(update={"customer": CustomerSummary(name="")}),
            make_order(1, amount="12.50", description="<b>Плов</b>"),
        ],
    )
    _, html = _split(state_event(state))

    assert "Всего заказов" in html
    assert '<div class="stat-value">12</div>' in html
    assert "background-color: #ef4444" in html
    assert html.count("<strong>Unknown</strong>") == 2
    assert "12.5 сум" in html
    assert "&lt;b&gt;Плов&lt;/b&gt;" in html


def test_render_event_keeps_multiline_description():
    state = mark_ready(DashboardState(), Stats(), [make_order(1, description="плов\nбез лука")])
    frame = state_event(state)
    _, html = _split(frame)

    assert "data: без лука" in frame
    assert "плов\nбез лука" in html


def test_render_event_without_orders_shows_empty_state():
    _, html = _split(state_event(mark_ready(DashboardState(), Stats(), [])))
    assert "Заказов нет" in html
