from .base import TimestampMixin, UUIDMixin
from .master import Category, Warehouse, AppUser
from .product import Product
from .stock import MovementType, StockBalance, StockLedger

__all__ = [
    # Base
    "TimestampMixin", "UUIDMixin",
    # Master
    "Category", "Warehouse", "AppUser",
    # Product
    "Product",
    # Stock
    "MovementType", "StockBalance", "StockLedger",
]
