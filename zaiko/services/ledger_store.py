"""
Stock Ledger Store - append-only movement history
"""
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import case, func
from sqlalchemy.orm import Session, joinedload

from zaiko.models import StockLedger, MovementType


class StockLedgerStore:
    """Appends and lists stock_ledger entries. There is no update or delete."""

    def __init__(self, db: Session):
        self.db = db

    def append(
        self,
        product_id: UUID,
        warehouse_id: UUID,
        movement_type: MovementType,
        quantity: int,
        created_by: UUID,
        note: Optional[str] = None
    ) -> StockLedger:
        """Add an entry to the current transaction; id is assigned on flush"""
        entry = StockLedger(
            product_id=product_id,
            warehouse_id=warehouse_id,
            movement_type=movement_type.value,
            quantity=quantity,
            note=note,
            created_by=created_by,
            created_at=datetime.now(timezone.utc)
        )
        self.db.add(entry)
        self.db.flush()
        return entry

    def _filtered(
        self,
        query,
        product_id: Optional[UUID],
        warehouse_id: Optional[UUID],
        movement_type: Optional[MovementType]
    ):
        if product_id:
            query = query.filter(StockLedger.product_id == product_id)

        if warehouse_id:
            query = query.filter(StockLedger.warehouse_id == warehouse_id)

        if movement_type:
            query = query.filter(StockLedger.movement_type == movement_type.value)

        return query

    def list_by_filter(
        self,
        product_id: Optional[UUID] = None,
        warehouse_id: Optional[UUID] = None,
        movement_type: Optional[MovementType] = None,
        limit: Optional[int] = None
    ) -> List[StockLedger]:
        """Entries newest first; `limit` <= 0 or None means no cap"""
        query = self.db.query(StockLedger).options(
            joinedload(StockLedger.product),
            joinedload(StockLedger.warehouse),
            joinedload(StockLedger.user)
        )
        query = self._filtered(query, product_id, warehouse_id, movement_type)
        query = query.order_by(StockLedger.created_at.desc(), StockLedger.id.desc())

        if limit is not None and limit > 0:
            query = query.limit(limit)

        return query.all()

    def count(
        self,
        product_id: Optional[UUID] = None,
        warehouse_id: Optional[UUID] = None,
        movement_type: Optional[MovementType] = None
    ) -> int:
        query = self.db.query(func.count(StockLedger.id))
        return self._filtered(query, product_id, warehouse_id, movement_type).scalar() or 0

    def replay_quantity(self, product_id: UUID, warehouse_id: UUID) -> int:
        """Quantity derived from the ledger alone, for checking the projection"""
        signed = case(
            (StockLedger.movement_type == MovementType.OUT.value, -StockLedger.quantity),
            else_=StockLedger.quantity
        )
        total = self._filtered(
            self.db.query(func.coalesce(func.sum(signed), 0)),
            product_id, warehouse_id, None
        ).scalar()
        return int(total or 0)
