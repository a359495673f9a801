"""
Stock Service - Business Logic for Inventory

Every change to on-hand quantity goes through `apply_movement`, which keeps
the stock_balance projection and the stock_ledger in step.
"""
import logging
from typing import List, Optional, Union
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session, contains_eager

from zaiko.core import settings
from zaiko.core.exceptions import InvalidRequest, InsufficientStock, NotFound, MovementConflict
from zaiko.core.locks import StockLockRegistry
from zaiko.models import AppUser, MovementType, Product, StockBalance, StockLedger, Warehouse
from zaiko.schemas.stock import StockMovementRequest
from .balance_store import StockBalanceStore
from .ledger_store import StockLedgerStore

logger = logging.getLogger(__name__)


def parse_movement_type(value: Union[str, MovementType, None]) -> Optional[MovementType]:
    """Accept 'in'/'out' in any case; None passes through"""
    if value is None or value == "":
        return None
    if isinstance(value, MovementType):
        return value
    try:
        return MovementType(str(value).lower())
    except ValueError:
        raise InvalidRequest(f"Unknown movement type: {value}")


class StockService:
    """Stock/Inventory business logic"""

    def __init__(
        self,
        db: Session,
        locks: StockLockRegistry,
        max_attempts: Optional[int] = None
    ):
        self.db = db
        self.locks = locks
        self.max_attempts = max(1, max_attempts or settings.MOVEMENT_MAX_ATTEMPTS)
        self.balances = StockBalanceStore(db)
        self.ledger = StockLedgerStore(db)

    # ===================== MOVEMENTS =====================

    def record_inbound(self, request: StockMovementRequest, actor_id: UUID) -> StockLedger:
        return self.apply_movement(request, MovementType.IN, actor_id)

    def record_outbound(self, request: StockMovementRequest, actor_id: UUID) -> StockLedger:
        return self.apply_movement(request, MovementType.OUT, actor_id)

    def apply_movement(
        self,
        request: StockMovementRequest,
        movement_type: Union[str, MovementType],
        actor_id: UUID
    ) -> StockLedger:
        """
        Validate and apply one stock movement.

        The read of the current quantity, the sufficiency check, the balance
        upsert and the ledger append run as one unit while holding the lock
        for (product, warehouse), and are committed in a single transaction.
        A storage conflict rolls back and retries the whole unit.

        Raises InvalidRequest, NotFound, InsufficientStock or MovementConflict.
        """
        movement_type = parse_movement_type(movement_type)
        if movement_type is None:
            raise InvalidRequest("Movement type is required")

        self._validate(request, actor_id)

        key = (request.product_id, request.warehouse_id)
        with self.locks.hold(key):
            attempt = 0
            while True:
                attempt += 1
                try:
                    entry, new_quantity = self._apply_unit(request, movement_type, actor_id)
                    self.db.commit()
                except InsufficientStock as e:
                    self.db.rollback()
                    logger.info(
                        f"Rejected {movement_type.value} movement for product {request.product_id} "
                        f"in warehouse {request.warehouse_id}: available={e.available} requested={e.requested}"
                    )
                    raise
                except (IntegrityError, OperationalError) as e:
                    self.db.rollback()
                    if attempt >= self.max_attempts:
                        logger.error(
                            f"Stock movement for {key} failed after {attempt} attempts: {e}"
                        )
                        raise MovementConflict(
                            "Stock movement could not be committed, please retry"
                        ) from e
                    logger.warning(f"Stock movement conflict for {key}, retrying ({attempt}/{self.max_attempts}): {e}")
                    continue
                except Exception:
                    self.db.rollback()
                    raise
                break

        self.db.refresh(entry)
        logger.info(
            f"Stock {movement_type.value} #{entry.id}: product {entry.product_id} "
            f"warehouse {entry.warehouse_id} qty {entry.quantity} -> on hand {new_quantity}"
        )
        return entry

    def _validate(self, request: StockMovementRequest, actor_id: Optional[UUID]) -> None:
        """Reject bad requests before the balance or ledger is touched"""
        if request.quantity is None or request.quantity <= 0:
            raise InvalidRequest("Quantity must be greater than zero")
        if not request.product_id:
            raise InvalidRequest("product_id is required")
        if not request.warehouse_id:
            raise InvalidRequest("warehouse_id is required")
        if not actor_id:
            raise InvalidRequest("Movement actor is required")

        if not self.db.query(Product.id).filter(Product.id == request.product_id).first():
            raise NotFound("Product", request.product_id)
        if not self.db.query(Warehouse.id).filter(Warehouse.id == request.warehouse_id).first():
            raise NotFound("Warehouse", request.warehouse_id)
        if not self.db.query(AppUser.id).filter(AppUser.id == actor_id).first():
            raise NotFound("User", actor_id)

    def _apply_unit(
        self,
        request: StockMovementRequest,
        movement_type: MovementType,
        actor_id: UUID
    ):
        if movement_type is MovementType.OUT:
            current = self.balances.lock_quantity(request.product_id, request.warehouse_id)
            available = current if current is not None else 0
            if available < request.quantity:
                raise InsufficientStock(available=available, requested=request.quantity)
            delta = -request.quantity
        else:
            delta = request.quantity

        new_quantity = self.balances.apply_delta(request.product_id, request.warehouse_id, delta)
        entry = self.ledger.append(
            product_id=request.product_id,
            warehouse_id=request.warehouse_id,
            movement_type=movement_type,
            quantity=request.quantity,
            created_by=actor_id,
            note=request.note
        )
        return entry, new_quantity

    # ===================== QUERIES =====================

    def get_quantity(self, product_id: UUID, warehouse_id: UUID) -> int:
        """On-hand quantity for a pair, 0 when it has never moved"""
        quantity = self.balances.get_quantity(product_id, warehouse_id)
        return quantity if quantity is not None else 0

    def get_current_stock(
        self,
        product_id: Optional[UUID] = None,
        warehouse_id: Optional[UUID] = None,
        search: Optional[str] = None
    ) -> List[StockBalance]:
        """Stock rows with product and warehouse loaded, ordered by product then warehouse name"""
        query = self.db.query(StockBalance)\
            .join(Product, StockBalance.product_id == Product.id)\
            .join(Warehouse, StockBalance.warehouse_id == Warehouse.id)\
            .options(contains_eager(StockBalance.product), contains_eager(StockBalance.warehouse))

        if product_id:
            query = query.filter(StockBalance.product_id == product_id)

        if warehouse_id:
            query = query.filter(StockBalance.warehouse_id == warehouse_id)

        if search:
            search_term = f"%{search}%"
            query = query.filter(
                or_(
                    Product.name.ilike(search_term),
                    Product.code.ilike(search_term)
                )
            )

        return query.order_by(Product.name, Warehouse.name).all()

    def get_ledger(
        self,
        product_id: Optional[UUID] = None,
        warehouse_id: Optional[UUID] = None,
        movement_type: Union[str, MovementType, None] = None,
        limit: Optional[int] = None
    ) -> List[StockLedger]:
        """Ledger entries newest first"""
        return self.ledger.list_by_filter(
            product_id=product_id,
            warehouse_id=warehouse_id,
            movement_type=parse_movement_type(movement_type),
            limit=limit
        )
