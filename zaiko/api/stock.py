"""
Stock API Router - movements, current stock and ledger
"""
from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from uuid import UUID

from zaiko.models import AppUser
from zaiko.schemas.stock import (
    StockMovementRequest, StockMovementResponse, StockBalanceResponse, LedgerEntryResponse
)
from zaiko.services import StockService, ReportService
from .auth import get_current_active_user
from .deps import get_stock_service, get_report_service

# Every stock route needs a signed-in user; movements also record who made them
stock_router = APIRouter(
    prefix="/stock",
    tags=["stock"],
    dependencies=[Depends(get_current_active_user)]
)


@stock_router.get("", response_model=List[StockBalanceResponse])
def list_stock(
    product_id: Optional[UUID] = Query(None),
    warehouse_id: Optional[UUID] = Query(None),
    search: Optional[str] = Query(None),
    service: StockService = Depends(get_stock_service)
):
    """Current on-hand quantity per product and warehouse"""
    return service.get_current_stock(product_id, warehouse_id, search)


@stock_router.post("/in", response_model=StockMovementResponse)
def stock_in(
    request: StockMovementRequest,
    current_user: AppUser = Depends(get_current_active_user),
    service: StockService = Depends(get_stock_service)
):
    entry = service.record_inbound(request, current_user.id)
    return {
        "message": "Stock received successfully",
        "transaction": LedgerEntryResponse.from_entry(entry)
    }


@stock_router.post("/out", response_model=StockMovementResponse)
def stock_out(
    request: StockMovementRequest,
    current_user: AppUser = Depends(get_current_active_user),
    service: StockService = Depends(get_stock_service)
):
    entry = service.record_outbound(request, current_user.id)
    return {
        "message": "Stock shipped successfully",
        "transaction": LedgerEntryResponse.from_entry(entry)
    }


@stock_router.get("/transactions", response_model=List[LedgerEntryResponse])
def list_transactions(
    product_id: Optional[UUID] = Query(None),
    warehouse_id: Optional[UUID] = Query(None),
    movement_type: Optional[str] = Query(None, alias="type"),
    limit: Optional[int] = Query(None),
    service: StockService = Depends(get_stock_service)
):
    """Ledger entries, newest first. No limit (or limit <= 0) returns everything."""
    entries = service.get_ledger(product_id, warehouse_id, movement_type, limit)
    return [LedgerEntryResponse.from_entry(e) for e in entries]


@stock_router.get("/low-stock", response_model=List[StockBalanceResponse])
def list_low_stock(
    threshold: Optional[int] = Query(None),
    reports: ReportService = Depends(get_report_service)
):
    return reports.get_low_stock_items(threshold)
