# Services Package
from .balance_store import StockBalanceStore
from .ledger_store import StockLedgerStore
from .stock_service import StockService, parse_movement_type
from .report_service import ReportService
from .product_service import ProductService
from .master_service import CategoryService, WarehouseService
from .seed_service import seed_default_data

__all__ = [
    "StockBalanceStore",
    "StockLedgerStore",
    "StockService",
    "parse_movement_type",
    "ReportService",
    "ProductService",
    "CategoryService",
    "WarehouseService",
    "seed_default_data",
]
