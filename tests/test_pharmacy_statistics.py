from datetime import date, datetime

import pytest

from dentalcare.core.config import settings
from dentalcare.services.report_errors import InvalidRange
from dentalcare.services.report_service import pharmacy_statistics

TODAY = date(2024, 6, 15)
START = date(2024, 5, 1)
END = date(2024, 6, 30)


@pytest.fixture()
def stock(make):
    return {
        "low": make.medicine("Ibuprofen 400mg", 15, date(2024, 8, 15)),
        "ok": make.medicine("Amoxicillin 500mg", 25, date(2024, 10, 15)),
        "expired": make.medicine("Metronidazole 400mg", 20, date(2024, 6, 14)),
        "no_expiry": make.medicine("Cotton Rolls", 100, None),
        "edge": make.medicine("Lidocaine 2% Gel", 50, date(2024, 9, 15)),
    }


@pytest.fixture()
def sales(make, stock):
    low, ok = stock["low"], stock["ok"]
    make.sale(datetime(2024, 4, 30, 23, 59, 59), "500.00", [(ok, 10, "500.00")])
    make.sale(datetime(2024, 5, 10, 11, 0), "70.00",
              [(low, 3, "30.00"), (ok, 2, "40.00")])
    make.sale(datetime(2024, 6, 30, 23, 59, 59), "80.00", [(ok, 4, "80.00")])
    make.sale(datetime(2024, 7, 1, 0, 0, 0), "100.00", [(low, 10, "100.00")])


def test_sales_totals(db, sales):
    stats = pharmacy_statistics(db, "monthly", START, END, today=TODAY)

    assert stats.total_sales == 2
    assert stats.total_revenue == pytest.approx(150.0)
    assert stats.average_sale_value == pytest.approx(75.0)


def test_top_selling_medicines_ordered_by_quantity(db, stock, sales):
    stats = pharmacy_statistics(db, "monthly", START, END, today=TODAY)

    top = [(m.medicine_id, m.medicine_name, m.quantity, m.revenue)
           for m in stats.top_selling_medicines]
    assert top == [
        (stock["ok"].id, "Amoxicillin 500mg", 6, pytest.approx(120.0)),
        (stock["low"].id, "Ibuprofen 400mg", 3, pytest.approx(30.0)),
    ]


def test_monthly_trends(db, sales):
    stats = pharmacy_statistics(db, "monthly", START, END, today=TODAY)

    trends = [(t.date, t.sales, t.revenue) for t in stats.monthly_trends]
    assert trends == [
        ("2024-05", 1, pytest.approx(70.0)),
        ("2024-06", 1, pytest.approx(80.0)),
    ]


def test_stock_alerts_include_the_reorder_point(db, stock):
    stats = pharmacy_statistics(db, "monthly", START, END, today=TODAY)

    alerts = [(a.medicine_name, a.current_stock, a.reorder_point)
              for a in stats.stock_alerts]
    assert alerts == [
        ("Ibuprofen 400mg", 15, settings.STOCK_REORDER_POINT),
        ("Metronidazole 400mg", 20, settings.STOCK_REORDER_POINT),
    ]


def test_expiry_alerts_cover_expired_and_next_three_months(db, stock):
    stats = pharmacy_statistics(db, "monthly", START, END, today=TODAY)

    alerts = {a.medicine_name: a.expiry_date for a in stats.expiry_alerts}
    assert alerts == {
        "Ibuprofen 400mg": date(2024, 8, 15),
        "Metronidazole 400mg": date(2024, 6, 14),
        "Lidocaine 2% Gel": date(2024, 9, 15),
    }


def test_alerts_ignore_the_report_window(db, stock):
    # alerts describe current stock, not the requested dates
    stats = pharmacy_statistics(db, "monthly", date(2020, 1, 1),
                                date(2020, 1, 31), today=TODAY)

    assert stats.total_sales == 0
    assert stats.average_sale_value == 0
    assert stats.top_selling_medicines == []
    assert len(stats.stock_alerts) == 2
    assert len(stats.expiry_alerts) == 3


def test_invalid_range(db):
    with pytest.raises(InvalidRange):
        pharmacy_statistics(db, "monthly", END, START, today=TODAY)


def test_repeated_calls_are_identical(db, sales):
    first = pharmacy_statistics(db, "monthly", START, END, today=TODAY)
    second = pharmacy_statistics(db, "monthly", START, END, today=TODAY)

    assert first.model_dump_json() == second.model_dump_json()
