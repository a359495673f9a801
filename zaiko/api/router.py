"""
API Router - JSON Endpoints
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional, List
from uuid import UUID
from datetime import datetime

from zaiko import __version__
from zaiko.core import get_db
from zaiko.services import ProductService, CategoryService, WarehouseService, ReportService
from zaiko.schemas.master import (
    CategoryCreate, CategoryResponse, WarehouseCreate, WarehouseUpdate, WarehouseResponse
)
from zaiko.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from zaiko.schemas.dashboard import DashboardSummary, AggregateSummary

# Import sub-routers
from .auth import router as auth_router, get_current_active_user
from .stock import stock_router
from .deps import get_report_service

api_router = APIRouter(tags=["API"])

# Dashboard and master data need a signed-in user; /status and /auth/login stay open
protected_router = APIRouter(dependencies=[Depends(get_current_active_user)])

# Include sub-routers
api_router.include_router(auth_router)
api_router.include_router(stock_router)

# ===================== HEALTH & STATUS =====================

@api_router.get("/status")
def api_status():
    return {"status": "ok", "version": __version__, "timestamp": datetime.now().isoformat()}

# ===================== DASHBOARD =====================

@protected_router.get("/dashboard/summary", response_model=DashboardSummary)
def dashboard_summary(
    threshold: Optional[int] = Query(None),
    reports: ReportService = Depends(get_report_service)
):
    return reports.get_dashboard_summary(threshold)

@protected_router.get("/dashboard/aggregates", response_model=AggregateSummary)
def dashboard_aggregates(
    threshold: Optional[int] = Query(None),
    reports: ReportService = Depends(get_report_service)
):
    return reports.get_aggregate_summary(threshold)

# ===================== CATEGORIES =====================

@protected_router.get("/categories", response_model=List[CategoryResponse])
def list_categories(db: Session = Depends(get_db)):
    return CategoryService.get_categories(db)

@protected_router.post("/categories", response_model=CategoryResponse, status_code=201)
def create_category(data: CategoryCreate, db: Session = Depends(get_db)):
    return CategoryService.create_category(db, data)

@protected_router.delete("/categories/{category_id}")
def delete_category(category_id: UUID, db: Session = Depends(get_db)):
    CategoryService.delete_category(db, category_id)
    return {"message": "Category deleted"}

# ===================== PRODUCTS =====================

@protected_router.get("/products", response_model=List[ProductResponse])
def list_products(
    search: Optional[str] = Query(None),
    category_id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db)
):
    return ProductService.get_products(db, search, category_id)

@protected_router.get("/products/{product_id}", response_model=ProductResponse)
def get_product(product_id: UUID, db: Session = Depends(get_db)):
    return ProductService.get_product_by_id(db, product_id)

@protected_router.post("/products", response_model=ProductResponse, status_code=201)
def create_product(data: ProductCreate, db: Session = Depends(get_db)):
    return ProductService.create_product(db, data)

@protected_router.put("/products/{product_id}", response_model=ProductResponse)
def update_product(product_id: UUID, data: ProductUpdate, db: Session = Depends(get_db)):
    return ProductService.update_product(db, product_id, data)

@protected_router.delete("/products/{product_id}")
def delete_product(product_id: UUID, db: Session = Depends(get_db)):
    ProductService.delete_product(db, product_id)
    return {"message": "Product deleted"}

# ===================== WAREHOUSES =====================

@protected_router.get("/warehouses", response_model=List[WarehouseResponse])
def list_warehouses(db: Session = Depends(get_db)):
    return WarehouseService.get_warehouses(db)

@protected_router.get("/warehouses/{warehouse_id}", response_model=WarehouseResponse)
def get_warehouse(warehouse_id: UUID, db: Session = Depends(get_db)):
    return WarehouseService.get_warehouse_by_id(db, warehouse_id)

@protected_router.post("/warehouses", response_model=WarehouseResponse, status_code=201)
def create_warehouse(data: WarehouseCreate, db: Session = Depends(get_db)):
    return WarehouseService.create_warehouse(db, data)

@protected_router.put("/warehouses/{warehouse_id}", response_model=WarehouseResponse)
def update_warehouse(warehouse_id: UUID, data: WarehouseUpdate, db: Session = Depends(get_db)):
    return WarehouseService.update_warehouse(db, warehouse_id, data)

@protected_router.delete("/warehouses/{warehouse_id}")
def delete_warehouse(warehouse_id: UUID, db: Session = Depends(get_db)):
    WarehouseService.delete_warehouse(db, warehouse_id)
    return {"message": "Warehouse deleted"}

api_router.include_router(protected_router)
