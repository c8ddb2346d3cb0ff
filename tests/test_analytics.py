from datetime import datetime, timedelta
from decimal import Decimal
from types import SimpleNamespace

import pytest

from medstock.exceptions import SnapshotValidationError
from medstock.schemas.sales import SaleRecord, TimeRange
from medstock.utils.analytics import aggregate_sales, window_sales
from tests.conftest import NOW, make_medicine, make_sale

def test_scenario_thirty_day_window_drops_old_sale():
    sales = [
        make_sale("A", quantity=1, price="100", when=NOW),
        make_sale("B", quantity=1, price="50", when=NOW - timedelta(days=40)),
    ]
    result = aggregate_sales(sales, "30days", NOW)
    
    assert result.total_revenue == Decimal("100")
    assert result.transaction_count == 1
    assert result.average_sale == Decimal("100")

def test_empty_window_has_zero_average():
    result = aggregate_sales([], TimeRange.LAST_7_DAYS, NOW)
    
    assert result.total_revenue == 0
    assert result.transaction_count == 0
    assert result.average_sale == 0
    assert result.daily_series == []
    assert result.top_sellers == []
    assert result.inventory_vs_revenue == []
    assert result.max_daily_revenue == 1
    assert result.max_daily_transactions == 1

def test_sales_outside_window_only_also_give_zero_average():
    sales = [make_sale(when=NOW - timedelta(days=100))]
    assert aggregate_sales(sales, "90days", NOW).average_sale == 0

@pytest.mark.parametrize("time_range,days", [("7days", 7), ("30days", 30), ("90days", 90)])
def test_window_boundary_is_inclusive(time_range, days):
    on_edge = make_sale(id="edge", when=NOW - timedelta(days=days))
    past_edge = make_sale(id="past", when=NOW - timedelta(days=days, seconds=1))
    assert window_sales([on_edge, past_edge], time_range, NOW) == [on_edge]

def test_future_dated_sales_are_included():
    future = make_sale(when=NOW + timedelta(days=3))
    assert aggregate_sales([future], "7days", NOW).transaction_count == 1

def test_unknown_time_range_is_rejected():
    with pytest.raises(SnapshotValidationError):
        aggregate_sales([], "365days", NOW)

@pytest.mark.parametrize("amount", ["abc", None, "NaN"])
def test_malformed_sale_amount_is_a_validation_error(amount):
    sale = SimpleNamespace(medicine_name="Paracetamol", quantity_sold=1, total_amount=amount, sale_date=NOW)
    with pytest.raises(SnapshotValidationError) as exc_info:
        aggregate_sales([sale], "7days", NOW)
    assert exc_info.value.field == "total_amount"

def test_average_sale_rounds_to_cents():
    sales = [make_sale(id=str(i), price=p, when=NOW) for i, p in enumerate(["10", "10", "10.01"])]
    assert aggregate_sales(sales, "7days", NOW).average_sale == Decimal("10.00")

def test_daily_series_grouped_by_calendar_day_ascending():
    sales = [
        make_sale("A", quantity=2, price="5", when=datetime(2025, 6, 14, 23, 59)),
        make_sale("B", quantity=1, price="3", when=datetime(2025, 6, 12, 8, 0)),
        make_sale("C", quantity=4, price="1", when=datetime(2025, 6, 14, 0, 1)),
    ]
    series = aggregate_sales(sales, "7days", NOW).daily_series
    
    assert [p.day.isoformat() for p in series] == ["2025-06-12", "2025-06-14"]
    assert series[1].total_revenue == Decimal("14")
    assert series[1].total_quantity_sold == 6
    assert series[1].transaction_count == 2

def test_chart_maxima_follow_daily_series():
    sales = [
        make_sale("A", quantity=1, price="30", when=datetime(2025, 6, 14, 10, 0)),
        make_sale("B", quantity=1, price="5", when=datetime(2025, 6, 13, 10, 0)),
        make_sale("C", quantity=1, price="5", when=datetime(2025, 6, 13, 11, 0)),
    ]
    result = aggregate_sales(sales, "7days", NOW)
    assert result.max_daily_revenue == Decimal("30")
    assert result.max_daily_transactions == 2

def test_top_sellers_limited_and_sorted_by_quantity():
    sales = [make_sale(f"Med {i}", quantity=i + 1, when=NOW) for i in range(14)]
    top = aggregate_sales(sales, "7days", NOW).top_sellers
    
    assert len(top) == 10
    quantities = [t.quantity_sold for t in top]
    assert quantities == sorted(quantities, reverse=True)
    assert top[0].medicine_name == "Med 13"

def test_top_sellers_sum_per_name_and_keep_first_seen_order_on_ties():
    sales = [
        make_sale("Zinc", quantity=2, price="1", when=NOW, id="1"),
        make_sale("Aspirin", quantity=3, price="2", when=NOW, id="2"),
        make_sale("Zinc", quantity=1, price="1", when=NOW, id="3"),
        make_sale("Biotin", quantity=5, price="1", when=NOW, id="4"),
    ]
    top = aggregate_sales(sales, "7days", NOW).top_sellers
    
    assert [(t.medicine_name, t.quantity_sold) for t in top] == [("Biotin", 5), ("Zinc", 3), ("Aspirin", 3)]
    assert top[1].revenue == Decimal("3")

def test_inventory_vs_revenue_uses_current_stock():
    medicines = [
        make_medicine("Aspirin", quantity=12),
        make_medicine("Unsold", quantity=99),
        make_medicine("Zinc", quantity=40),
    ]
    sales = [
        make_sale("Aspirin", quantity=1, price="5", when=NOW, id="1"),
        make_sale("Zinc", quantity=1, price="50", when=NOW, id="2"),
        make_sale("Deleted Med", quantity=1, price="500", when=NOW, id="3"),
    ]
    points = aggregate_sales(sales, "30days", NOW, medicines=medicines).inventory_vs_revenue
    
    assert [(p.medicine_name, p.stock_quantity, p.revenue) for p in points] == [
        ("Zinc", 40, Decimal("50")),
        ("Aspirin", 12, Decimal("5")),
    ]

def test_inventory_vs_revenue_limited_to_fifteen():
    medicines = [make_medicine(f"Med {i}") for i in range(20)]
    sales = [make_sale(f"Med {i}", price=str(i + 1), when=NOW) for i in range(20)]
    points = aggregate_sales(sales, "7days", NOW, medicines=medicines).inventory_vs_revenue
    
    assert len(points) == 15
    assert points[0].medicine_name == "Med 19"

def test_zero_revenue_sales_are_not_plotted():
    medicines = [make_medicine("Sample")]
    sales = [make_sale("Sample", price="0", when=NOW)]
    assert aggregate_sales(sales, "7days", NOW, medicines=medicines).inventory_vs_revenue == []

def test_accepts_backend_json_records():
    sale = SaleRecord.model_validate({
        "_id": "s1",
        "medicineId": "m1",
        "medicineName": "Aspirin",
        "quantitySold": 2,
        "salePrice": 12.5,
        "totalAmount": 25,
        "saleDate": "2025-06-15T08:00:00",
        "remainingQuantity": 10,
        "customerName": "Ali",
    })
    result = aggregate_sales([sale], "7days", NOW)
    assert result.total_revenue == Decimal("25")

def test_aware_sale_dates_compare_against_aware_now():
    from datetime import timezone
    now = NOW.replace(tzinfo=timezone.utc)
    sale = make_sale(when=datetime(2025, 6, 10, tzinfo=timezone(timedelta(hours=5))))
    assert aggregate_sales([sale], "7days", now).transaction_count == 1

def test_idempotent_and_does_not_modify_input():
    sales = [make_sale("A", when=NOW), make_sale("B", quantity=2, when=NOW - timedelta(days=2))]
    snapshot = [s.model_copy() for s in sales]
    
    first = aggregate_sales(sales, "30days", NOW)
    second = aggregate_sales(sales, "30days", NOW)
    
    assert first == second
    assert sales == snapshot

def test_time_range_days():
    assert [t.days for t in TimeRange] == [7, 30, 90]
