"""
Dashboard / Reporting Schemas
"""
from pydantic import BaseModel
from typing import List, Optional
from uuid import UUID

from .stock import LedgerEntryResponse

class WarehouseStockSummary(BaseModel):
    warehouse_id: UUID
    warehouse_name: str
    total_items: int
    total_quantity: int

class CategoryStockSummary(BaseModel):
    category_id: Optional[UUID]  # None = uncategorized products
    category_name: str
    total_items: int
    total_quantity: int

class AggregateSummary(BaseModel):
    total_on_hand: int
    low_stock_threshold: int
    low_stock_pairs: int
    per_warehouse: List[WarehouseStockSummary]
    per_category: List[CategoryStockSummary]

class DashboardSummary(AggregateSummary):
    total_products: int
    total_warehouses: int
    recent_transactions: List[LedgerEntryResponse]
