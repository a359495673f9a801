"""
Dashboard aggregates over stock balances.
"""
import pytest

from zaiko.core.exceptions import InvalidRequest
from zaiko.models import Category, Product, Warehouse
from zaiko.services import ReportService
from zaiko.services.report_service import UNCATEGORIZED


@pytest.fixture
def stocked(db, stock_service, movement, user, category, product, warehouse, other_warehouse):
    loose = Product(code="L-9", name="Loose Screws", unit="bag")
    empty_category = Category(name="Electronics")
    empty_warehouse = Warehouse(name="Zama Depot")
    db.add_all([loose, empty_category, empty_warehouse])
    db.commit()

    stock_service.record_inbound(movement(product.id, warehouse.id, 30), user.id)
    stock_service.record_inbound(movement(product.id, other_warehouse.id, 5), user.id)
    stock_service.record_inbound(movement(loose.id, warehouse.id, 12), user.id)
    stock_service.record_outbound(movement(loose.id, warehouse.id, 4), user.id)
    return {"loose": loose, "empty_category": empty_category, "empty_warehouse": empty_warehouse}


def test_total_and_low_stock(db, stocked):
    reports = ReportService(db)

    assert reports.get_total_on_hand() == 43
    # (paper, osaka)=5 and (screws, tokyo)=8
    assert reports.get_low_stock_count(10) == 2
    assert reports.get_low_stock_count(5) == 1
    assert reports.get_low_stock_count(0) == 0

    low = reports.get_low_stock_items(10)
    assert [(b.product.code, b.quantity) for b in low] == [("P-001", 5), ("L-9", 8)]


def test_negative_threshold_rejected(db):
    with pytest.raises(InvalidRequest):
        ReportService(db).get_low_stock_count(-1)


def test_totals_by_warehouse(db, stocked):
    totals = {t.warehouse_name: t for t in ReportService(db).get_totals_by_warehouse()}

    assert totals["Tokyo Main"].total_quantity == 38
    assert totals["Tokyo Main"].total_items == 2
    assert totals["Osaka Annex"].total_quantity == 5
    assert totals["Zama Depot"].total_quantity == 0
    assert totals["Zama Depot"].total_items == 0


def test_totals_by_category(db, stocked):
    totals = {t.category_name: t for t in ReportService(db).get_totals_by_category()}

    assert totals["Consumables"].total_quantity == 35
    assert totals["Consumables"].total_items == 1
    assert totals["Electronics"].total_quantity == 0
    assert totals[UNCATEGORIZED].category_id is None
    assert totals[UNCATEGORIZED].total_quantity == 8


def test_empty_database_summary(db):
    summary = ReportService(db).get_aggregate_summary()

    assert summary.total_on_hand == 0
    assert summary.low_stock_pairs == 0
    assert summary.low_stock_threshold == 10
    assert summary.per_warehouse == []
    assert summary.per_category == []


def test_dashboard_summary(db, stocked):
    summary = ReportService(db).get_dashboard_summary(threshold=10, recent_limit=3)

    assert summary.total_products == 2
    assert summary.total_warehouses == 3
    assert summary.total_on_hand == 43
    assert summary.low_stock_pairs == 2
    assert len(summary.recent_transactions) == 3
    assert summary.recent_transactions[0].type.value == "out"
    assert summary.recent_transactions[0].product.code == "L-9"
