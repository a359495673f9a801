# Pydantic Schemas Package
from .master import CategoryCreate, CategoryResponse, WarehouseCreate, WarehouseUpdate, WarehouseResponse
from .product import ProductCreate, ProductUpdate, ProductSummary, ProductResponse
from .stock import (
    StockMovementRequest, StockBalanceResponse, LedgerEntryResponse, StockMovementResponse,
    WarehouseSummary, UserSummary,
)
from .dashboard import WarehouseStockSummary, CategoryStockSummary, AggregateSummary, DashboardSummary

__all__ = [
    "CategoryCreate", "CategoryResponse", "WarehouseCreate", "WarehouseUpdate", "WarehouseResponse",
    "ProductCreate", "ProductUpdate", "ProductSummary", "ProductResponse",
    "StockMovementRequest", "StockBalanceResponse", "LedgerEntryResponse", "StockMovementResponse",
    "WarehouseSummary", "UserSummary",
    "WarehouseStockSummary", "CategoryStockSummary", "AggregateSummary", "DashboardSummary",
]
