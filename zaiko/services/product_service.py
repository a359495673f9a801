"""
Product Service - Business Logic for Products
"""
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError
from sqlalchemy import or_
from typing import List, Optional
from uuid import UUID
import logging

from zaiko.core.exceptions import Conflict, NotFound
from zaiko.models import Product, Category, StockBalance, StockLedger
from zaiko.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

class ProductService:
    """Product business logic"""

    @staticmethod
    def get_products(
        db: Session,
        search: Optional[str] = None,
        category_id: Optional[UUID] = None
    ) -> List[Product]:
        """Get products with filters"""
        query = db.query(Product).options(joinedload(Product.category))

        if category_id:
            query = query.filter(Product.category_id == category_id)

        if search:
            search_term = f"%{search}%"
            query = query.filter(
                or_(
                    Product.code.ilike(search_term),
                    Product.name.ilike(search_term)
                )
            )

        return query.order_by(Product.name).all()

    @staticmethod
    def get_product_by_id(db: Session, product_id: UUID) -> Product:
        """Get product by ID"""
        product = db.query(Product).options(joinedload(Product.category))\
            .filter(Product.id == product_id).first()
        if not product:
            raise NotFound("Product", product_id)
        return product

    @staticmethod
    def _check_category(db: Session, category_id: Optional[UUID]) -> None:
        if category_id and not db.query(Category.id).filter(Category.id == category_id).first():
            raise NotFound("Category", category_id)

    @staticmethod
    def _check_code_free(db: Session, code: str, exclude_id: Optional[UUID] = None) -> None:
        query = db.query(Product.id).filter(Product.code == code)
        if exclude_id:
            query = query.filter(Product.id != exclude_id)
        if query.first():
            raise Conflict(f"Product code '{code}' already exists")

    @staticmethod
    def create_product(db: Session, product_data: ProductCreate) -> Product:
        """Create new product"""
        ProductService._check_category(db, product_data.category_id)
        ProductService._check_code_free(db, product_data.code)

        product = Product(
            code=product_data.code,
            name=product_data.name,
            description=product_data.description,
            category_id=product_data.category_id,
            unit=product_data.unit
        )

        db.add(product)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise Conflict(f"Product code '{product_data.code}' already exists")
        logger.info(f"Created product {product.code} ({product.id})")
        return ProductService.get_product_by_id(db, product.id)

    @staticmethod
    def update_product(db: Session, product_id: UUID, product_data: ProductUpdate) -> Product:
        """Update product"""
        product = ProductService.get_product_by_id(db, product_id)
        changes = product_data.model_dump(exclude_unset=True)

        if "category_id" in changes:
            ProductService._check_category(db, changes["category_id"])
        if changes.get("code"):
            ProductService._check_code_free(db, changes["code"], exclude_id=product_id)

        for field, value in changes.items():
            # Required columns keep their value when the update sends null
            if value is None and field in ("code", "name", "unit"):
                continue
            setattr(product, field, value)

        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise Conflict(f"Product code '{changes.get('code')}' already exists")
        return ProductService.get_product_by_id(db, product_id)

    @staticmethod
    def _has_stock_history(db: Session, product_id: UUID) -> bool:
        has_stock = db.query(StockBalance.id).filter(StockBalance.product_id == product_id).first()
        has_ledger = db.query(StockLedger.id).filter(StockLedger.product_id == product_id).first()
        return bool(has_stock or has_ledger)

    @staticmethod
    def delete_product(db: Session, product_id: UUID) -> None:
        """Delete a product that has never had stock movements"""
        product = ProductService.get_product_by_id(db, product_id)
        code = product.code
        message = f"Product {code} has stock history and cannot be deleted"

        if ProductService._has_stock_history(db, product_id):
            raise Conflict(message)

        db.delete(product)
        try:
            db.commit()
        except IntegrityError:
            # A movement committed after the history check; the foreign key refuses the delete
            db.rollback()
            raise Conflict(message)
        logger.info(f"Deleted product {code} ({product_id})")
