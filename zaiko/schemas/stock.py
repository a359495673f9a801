"""
Stock Schemas
"""
from pydantic import BaseModel
from typing import Optional
from uuid import UUID
from datetime import datetime

from zaiko.models.stock import MovementType
from .product import ProductSummary

class StockMovementRequest(BaseModel):
    product_id: UUID
    warehouse_id: UUID
    quantity: int  # must be > 0, checked by StockService
    note: Optional[str] = None

class WarehouseSummary(BaseModel):
    id: UUID
    name: str
    location: Optional[str] = None

    class Config:
        from_attributes = True

class UserSummary(BaseModel):
    id: UUID
    username: str

    class Config:
        from_attributes = True

class StockBalanceResponse(BaseModel):
    id: UUID
    product_id: UUID
    warehouse_id: UUID
    quantity: int
    updated_at: Optional[datetime]
    product: ProductSummary
    warehouse: WarehouseSummary

    class Config:
        from_attributes = True

class LedgerEntryResponse(BaseModel):
    id: int
    product_id: UUID
    warehouse_id: UUID
    type: MovementType
    quantity: int
    note: Optional[str]
    user_id: UUID
    created_at: datetime
    product: Optional[ProductSummary] = None
    warehouse: Optional[WarehouseSummary] = None
    user: Optional[UserSummary] = None

    @classmethod
    def from_entry(cls, entry) -> "LedgerEntryResponse":
        return cls(
            id=entry.id,
            product_id=entry.product_id,
            warehouse_id=entry.warehouse_id,
            type=MovementType(entry.movement_type),
            quantity=entry.quantity,
            note=entry.note,
            user_id=entry.created_by,
            created_at=entry.created_at,
            product=ProductSummary.model_validate(entry.product) if entry.product else None,
            warehouse=WarehouseSummary.model_validate(entry.warehouse) if entry.warehouse else None,
            user=UserSummary.model_validate(entry.user) if entry.user else None,
        )

class StockMovementResponse(BaseModel):
    message: str
    transaction: LedgerEntryResponse
