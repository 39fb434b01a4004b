import asyncio

from app.dashboard.session import DashboardSession
from app.models import ChangeType, DashboardStatus, OrderChange, OrderStatus, Stats
from conftest import FakeOrdersClient, make_order


def test_load_fetches_stats_and_orders():
    client = FakeOrdersClient(
        stats=Stats(total_orders=12, total_customers=5, pending_orders=3),
        orders=[make_order(i) for i in range(15, 0, -1)],
    )
    state = asyncio.run(DashboardSession(client).load())

    assert state.status == DashboardStatus.READY
    assert state.stats.total_orders == 12
    assert len(state.orders) == 10
    assert client.recent_limits == [10]


def test_stream_lifecycle():
    async def scenario():
        client = FakeOrdersClient(stats=Stats(total_orders=1, pending_orders=0), orders=[make_order(1)])
        feed = client.change_feed
        stream = DashboardSession(client).stream()

        loading = await stream.__anext__()
        assert loading.status == DashboardStatus.LOADING
        assert feed.subscriber_count == 1

        ready = await stream.__anext__()
        assert ready.status == DashboardStatus.READY
        assert ready.stats.total_orders == 1

        feed.publish(OrderChange(type=ChangeType.INSERT, record=make_order(2)))
        updated = await stream.__anext__()
        assert updated.orders[0].id == make_order(2).id
        assert updated.stats.total_orders == 2
        assert updated.stats.pending_orders == 1

        feed.publish(OrderChange(type=ChangeType.UPDATE, record=make_order(1, status=OrderStatus.COMPLETED)))
        updated = await stream.__anext__()
        assert updated.stats.total_orders == 3
        assert updated.stats.completed_orders == 0

        # teardown: страница закрыта
        await stream.aclose()
        assert feed.subscriber_count == 0

    asyncio.run(scenario())


def test_events_during_load_are_applied_after_ready():
    async def scenario():
        client = FakeOrdersClient(stats=Stats(total_orders=5), orders=[])
        stream = DashboardSession(client).stream()

        await stream.__anext__()
        client.change_feed.publish(OrderChange(type=ChangeType.INSERT, record=make_order(9)))

        ready = await stream.__anext__()
        assert ready.orders == []

        patched = await stream.__anext__()
        assert patched.stats.total_orders == 6
        await stream.aclose()

    asyncio.run(scenario())
