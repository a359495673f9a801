"""
Stock Balance Store - access to the current-quantity projection
"""
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from zaiko.models import StockBalance


class StockBalanceStore:
    """
    Reads and upserts stock_balance rows.

    `lock_quantity` followed by `apply_delta` is only safe while the caller
    holds the pair lock and keeps both calls in one transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def _pair_query(self, query, product_id: UUID, warehouse_id: UUID):
        return query.filter(
            StockBalance.product_id == product_id,
            StockBalance.warehouse_id == warehouse_id
        )

    def get_quantity(self, product_id: UUID, warehouse_id: UUID) -> Optional[int]:
        """Current quantity, or None when the pair has never moved"""
        return self._pair_query(
            self.db.query(StockBalance.quantity), product_id, warehouse_id
        ).scalar()

    def lock_quantity(self, product_id: UUID, warehouse_id: UUID) -> Optional[int]:
        """Same as get_quantity but holds a row lock until the transaction ends"""
        return self._pair_query(
            self.db.query(StockBalance.quantity), product_id, warehouse_id
        ).with_for_update().scalar()

    def apply_delta(self, product_id: UUID, warehouse_id: UUID, delta: int) -> int:
        """
        Add `delta` to the pair's quantity, creating the row with `delta` when
        absent. Returns the new quantity. Nothing is committed here.
        """
        now = datetime.now(timezone.utc)
        updated = self._pair_query(
            self.db.query(StockBalance), product_id, warehouse_id
        ).update(
            {
                StockBalance.quantity: StockBalance.quantity + delta,
                StockBalance.updated_at: now,
            },
            synchronize_session=False
        )

        if updated == 0:
            balance = StockBalance(
                product_id=product_id,
                warehouse_id=warehouse_id,
                quantity=delta,
                updated_at=now
            )
            self.db.add(balance)
            # Unique (product_id, warehouse_id) violation surfaces here
            self.db.flush()
            return delta

        return self.get_quantity(product_id, warehouse_id)
