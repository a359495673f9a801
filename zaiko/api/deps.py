"""
Shared FastAPI dependencies
"""
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from zaiko.core import get_db
from zaiko.core.locks import StockLockRegistry
from zaiko.services import StockService, ReportService

def get_stock_locks(request: Request) -> StockLockRegistry:
    """The lock registry owned by the running application"""
    return request.app.state.stock_locks

def get_stock_service(
    db: Session = Depends(get_db),
    locks: StockLockRegistry = Depends(get_stock_locks)
) -> StockService:
    return StockService(db, locks)

def get_report_service(db: Session = Depends(get_db)) -> ReportService:
    return ReportService(db)
