"""
Master Data Service - Categories & Warehouses
"""
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import List
from uuid import UUID
import logging

from zaiko.core.exceptions import Conflict, NotFound
from zaiko.models import Category, Product, Warehouse, StockBalance, StockLedger
from zaiko.schemas.master import CategoryCreate, WarehouseCreate, WarehouseUpdate

logger = logging.getLogger(__name__)

class CategoryService:

    @staticmethod
    def get_categories(db: Session) -> List[Category]:
        return db.query(Category).order_by(Category.name).all()

    @staticmethod
    def create_category(db: Session, data: CategoryCreate) -> Category:
        category = Category(name=data.name)
        db.add(category)
        db.commit()
        db.refresh(category)
        return category

    @staticmethod
    def delete_category(db: Session, category_id: UUID) -> None:
        """Delete a category; its products become uncategorized"""
        category = db.query(Category).filter(Category.id == category_id).first()
        if not category:
            raise NotFound("Category", category_id)

        db.query(Product).filter(Product.category_id == category_id)\
            .update({Product.category_id: None}, synchronize_session=False)
        db.delete(category)
        db.commit()
        logger.info(f"Deleted category {category.name} ({category_id})")

class WarehouseService:

    @staticmethod
    def get_warehouses(db: Session) -> List[Warehouse]:
        return db.query(Warehouse).order_by(Warehouse.name).all()

    @staticmethod
    def get_warehouse_by_id(db: Session, warehouse_id: UUID) -> Warehouse:
        warehouse = db.query(Warehouse).filter(Warehouse.id == warehouse_id).first()
        if not warehouse:
            raise NotFound("Warehouse", warehouse_id)
        return warehouse

    @staticmethod
    def create_warehouse(db: Session, data: WarehouseCreate) -> Warehouse:
        warehouse = Warehouse(name=data.name, location=data.location)
        db.add(warehouse)
        db.commit()
        db.refresh(warehouse)
        logger.info(f"Created warehouse {warehouse.name} ({warehouse.id})")
        return warehouse

    @staticmethod
    def update_warehouse(db: Session, warehouse_id: UUID, data: WarehouseUpdate) -> Warehouse:
        warehouse = WarehouseService.get_warehouse_by_id(db, warehouse_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("name"):
            warehouse.name = changes["name"]
        if "location" in changes:
            warehouse.location = changes["location"]

        db.commit()
        db.refresh(warehouse)
        return warehouse

    @staticmethod
    def _has_stock_history(db: Session, warehouse_id: UUID) -> bool:
        has_stock = db.query(StockBalance.id).filter(StockBalance.warehouse_id == warehouse_id).first()
        has_ledger = db.query(StockLedger.id).filter(StockLedger.warehouse_id == warehouse_id).first()
        return bool(has_stock or has_ledger)

    @staticmethod
    def delete_warehouse(db: Session, warehouse_id: UUID) -> None:
        """Delete a warehouse that has never held stock"""
        warehouse = WarehouseService.get_warehouse_by_id(db, warehouse_id)
        name = warehouse.name
        message = f"Warehouse {name} has stock history and cannot be deleted"

        if WarehouseService._has_stock_history(db, warehouse_id):
            raise Conflict(message)

        db.delete(warehouse)
        try:
            db.commit()
        except IntegrityError:
            # A movement committed after the history check; the foreign key refuses the delete
            db.rollback()
            raise Conflict(message)
        logger.info(f"Deleted warehouse {name} ({warehouse_id})")
