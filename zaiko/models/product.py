"""
Product Model
"""
from sqlalchemy import Column, String, ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from zaiko.core import Base
from .base import UUIDMixin, TimestampMixin

class Product(Base, UUIDMixin, TimestampMixin):
    """Product Master"""
    __tablename__ = "product"
    
    code = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(300), nullable=False)
    description = Column(Text)
    category_id = Column(UUID(as_uuid=True), ForeignKey("category.id"), nullable=True, index=True)
    unit = Column(String(30), nullable=False)  # pcs, box, kg ...
    
    # Relationships
    category = relationship("Category", back_populates="products")
    # History rows are never nulled by the ORM; the foreign key refuses the delete
    stock_balances = relationship("StockBalance", back_populates="product", passive_deletes=True)
    stock_ledger = relationship("StockLedger", back_populates="product", passive_deletes=True)
