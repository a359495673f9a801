"""
Stock & Inventory Models

StockBalance is the current-quantity projection per (product, warehouse).
StockLedger is the append-only movement history the projection is derived from.
"""
import enum

from sqlalchemy import (
    Column, String, Integer, DateTime, ForeignKey, Text,
    CheckConstraint, UniqueConstraint, event, func,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from zaiko.core import Base
from zaiko.core.exceptions import ImmutableLedgerError
from .base import UUIDMixin


class MovementType(str, enum.Enum):
    IN = "in"    # inbound, adds to on-hand
    OUT = "out"  # outbound, subtracts from on-hand


class StockBalance(Base, UUIDMixin):
    """Current on-hand quantity for one product in one warehouse"""
    __tablename__ = "stock_balance"
    __table_args__ = (
        UniqueConstraint("product_id", "warehouse_id", name="uq_stock_balance_product_warehouse"),
        CheckConstraint("quantity >= 0", name="ck_stock_balance_quantity_non_negative"),
    )

    product_id = Column(UUID(as_uuid=True), ForeignKey("product.id"), nullable=False, index=True)
    warehouse_id = Column(UUID(as_uuid=True), ForeignKey("warehouse.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    product = relationship("Product", back_populates="stock_balances")
    warehouse = relationship("Warehouse", back_populates="stock_balances")


class StockLedger(Base):
    """Stock Movement Ledger"""
    __tablename__ = "stock_ledger"
    __table_args__ = (
        CheckConstraint("movement_type IN ('in', 'out')", name="ck_stock_ledger_movement_type"),
        CheckConstraint("quantity > 0", name="ck_stock_ledger_quantity_positive"),
    )

    # Monotonic sequence id, ties on created_at are ordered by it
    id = Column(Integer, primary_key=True, autoincrement=True)

    product_id = Column(UUID(as_uuid=True), ForeignKey("product.id"), nullable=False, index=True)
    warehouse_id = Column(UUID(as_uuid=True), ForeignKey("warehouse.id"), nullable=False, index=True)

    # Movement info
    movement_type = Column(String(10), nullable=False)  # in, out
    quantity = Column(Integer, nullable=False)  # Always positive, direction is movement_type

    # Metadata
    note = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    created_by = Column(UUID(as_uuid=True), ForeignKey("app_user.id"), nullable=False)

    # Relationships
    product = relationship("Product", back_populates="stock_ledger")
    warehouse = relationship("Warehouse", back_populates="stock_ledger")
    user = relationship("AppUser", back_populates="stock_movements")

    @property
    def delta(self) -> int:
        """Signed effect of this entry on the projection"""
        if self.movement_type == MovementType.OUT.value:
            return -self.quantity
        return self.quantity


@event.listens_for(StockLedger, "before_update")
def _reject_ledger_update(mapper, connection, target):
    raise ImmutableLedgerError(target.id, "UPDATE")


@event.listens_for(StockLedger, "before_delete")
def _reject_ledger_delete(mapper, connection, target):
    raise ImmutableLedgerError(target.id, "DELETE")
