from app.bot.utils.text import NO_ORDERS_TEXT, orders_text, start_text, stats_text
from app.models import CustomerSummary, OrderStatus, Stats
from conftest import make_order


def test_stats_text_exact():
    text = stats_text(Stats(total_orders=12, total_customers=5, pending_orders=3))
    assert text == (
        "📊 Заказ Статистика:\n\n"
        "✅ Умумий заказлар: 12\n"
        "👥 Умумий мижозлар: 5\n"
        "⏳ Кутиётирган заказлар: 3"
    )


def test_orders_text_empty():
    assert orders_text([]) == NO_ORDERS_TEXT == "Заказлар йўқ"


def test_orders_text_numbered_from_one():
    text = orders_text([
        make_order(2, amount="150000.00"),
        make_order(1, status=OrderStatus.CANCELLED, amount="12.50", customer=None),
    ])
    assert text == (
        "📋 Охирги заказлар:\n\n"
        "1. Ali - 150000 сум (pending)\n"
        "2. Unknown - 12.5 сум (cancelled)\n"
    )


def test_start_text_uses_first_name():
    assert start_text("Ali").startswith("Салом Ali! 👋\n\n")
    assert "/stats - Заказ статистика" in start_text("Ali")


def test_orders_text_blank_name_falls_back_to_unknown():
    order = make_order(1).model_copy(update={"customer": CustomerSummary(name="")})
    assert orders_text([order]) == "📋 Охирги заказлар:\n\n1. Unknown - 150000 сум (pending)\n"
