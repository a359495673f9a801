"""
Report Service
Read-only views over stock balances and the ledger for the dashboard:
- Total on-hand quantity
- Low stock pairs at or below a threshold
- Totals per warehouse and per category
"""
from sqlalchemy.orm import Session, contains_eager
from sqlalchemy import func
from typing import List, Optional

from zaiko.core import settings
from zaiko.core.exceptions import InvalidRequest
from zaiko.models import Category, Product, StockBalance, Warehouse
from zaiko.schemas.dashboard import (
    AggregateSummary, CategoryStockSummary, DashboardSummary, WarehouseStockSummary
)
from zaiko.schemas.stock import LedgerEntryResponse
from .ledger_store import StockLedgerStore

UNCATEGORIZED = "Uncategorized"

class ReportService:

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _threshold(threshold: Optional[int]) -> int:
        if threshold is None:
            return settings.LOW_STOCK_THRESHOLD
        if threshold < 0:
            raise InvalidRequest("Low stock threshold must not be negative")
        return threshold

    def get_total_on_hand(self) -> int:
        total = self.db.query(func.coalesce(func.sum(StockBalance.quantity), 0)).scalar()
        return int(total or 0)

    def get_low_stock_count(self, threshold: Optional[int] = None) -> int:
        """Number of (product, warehouse) pairs with quantity <= threshold"""
        threshold = self._threshold(threshold)
        return self.db.query(func.count(StockBalance.id)).filter(
            StockBalance.quantity <= threshold
        ).scalar() or 0

    def get_low_stock_items(self, threshold: Optional[int] = None) -> List[StockBalance]:
        """Balances at or below threshold, lowest quantity first"""
        threshold = self._threshold(threshold)
        return self.db.query(StockBalance)\
            .join(Product, StockBalance.product_id == Product.id)\
            .join(Warehouse, StockBalance.warehouse_id == Warehouse.id)\
            .options(contains_eager(StockBalance.product), contains_eager(StockBalance.warehouse))\
            .filter(StockBalance.quantity <= threshold)\
            .order_by(StockBalance.quantity, Product.name, Warehouse.name)\
            .all()

    def get_totals_by_warehouse(self) -> List[WarehouseStockSummary]:
        """Every warehouse, including those that have never held stock"""
        rows = self.db.query(
            Warehouse.id,
            Warehouse.name,
            func.count(func.distinct(StockBalance.product_id)),
            func.coalesce(func.sum(StockBalance.quantity), 0)
        ).outerjoin(
            StockBalance, StockBalance.warehouse_id == Warehouse.id
        ).group_by(
            Warehouse.id, Warehouse.name
        ).order_by(Warehouse.name).all()

        return [
            WarehouseStockSummary(
                warehouse_id=wid,
                warehouse_name=name,
                total_items=int(items or 0),
                total_quantity=int(qty or 0)
            )
            for wid, name, items, qty in rows
        ]

    def get_totals_by_category(self) -> List[CategoryStockSummary]:
        """
        Every category, plus an uncategorized bucket when products without a
        category hold stock.
        """
        rows = self.db.query(
            Category.id,
            Category.name,
            func.count(func.distinct(StockBalance.product_id)),
            func.coalesce(func.sum(StockBalance.quantity), 0)
        ).outerjoin(
            Product, Product.category_id == Category.id
        ).outerjoin(
            StockBalance, StockBalance.product_id == Product.id
        ).group_by(
            Category.id, Category.name
        ).order_by(Category.name).all()

        summaries = [
            CategoryStockSummary(
                category_id=cid,
                category_name=name,
                total_items=int(items or 0),
                total_quantity=int(qty or 0)
            )
            for cid, name, items, qty in rows
        ]

        items, qty = self.db.query(
            func.count(func.distinct(StockBalance.product_id)),
            func.coalesce(func.sum(StockBalance.quantity), 0)
        ).join(
            Product, StockBalance.product_id == Product.id
        ).filter(Product.category_id.is_(None)).one()

        if items:
            summaries.append(CategoryStockSummary(
                category_id=None,
                category_name=UNCATEGORIZED,
                total_items=int(items),
                total_quantity=int(qty or 0)
            ))

        return summaries

    def get_aggregate_summary(self, threshold: Optional[int] = None) -> AggregateSummary:
        threshold = self._threshold(threshold)
        return AggregateSummary(
            total_on_hand=self.get_total_on_hand(),
            low_stock_threshold=threshold,
            low_stock_pairs=self.get_low_stock_count(threshold),
            per_warehouse=self.get_totals_by_warehouse(),
            per_category=self.get_totals_by_category()
        )

    def get_dashboard_summary(
        self,
        threshold: Optional[int] = None,
        recent_limit: Optional[int] = None
    ) -> DashboardSummary:
        summary = self.get_aggregate_summary(threshold)
        recent = StockLedgerStore(self.db).list_by_filter(
            limit=recent_limit or settings.RECENT_TRANSACTIONS_LIMIT
        )
        return DashboardSummary(
            **summary.model_dump(),
            total_products=self.db.query(func.count(Product.id)).scalar() or 0,
            total_warehouses=self.db.query(func.count(Warehouse.id)).scalar() or 0,
            recent_transactions=[LedgerEntryResponse.from_entry(e) for e in recent]
        )
