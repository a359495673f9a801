"""
Master Tables: Category, Warehouse, AppUser
"""
from sqlalchemy import Column, String, Boolean, Text
from sqlalchemy.orm import relationship
from zaiko.core import Base
from .base import UUIDMixin, TimestampMixin

class Category(Base, UUIDMixin):
    """Product Category"""
    __tablename__ = "category"
    
    name = Column(String(100), nullable=False)
    
    # Relationships
    products = relationship("Product", back_populates="category")

class Warehouse(Base, UUIDMixin, TimestampMixin):
    """Warehouse"""
    __tablename__ = "warehouse"
    
    name = Column(String(200), nullable=False)
    location = Column(Text)
    
    # Relationships
    stock_balances = relationship("StockBalance", back_populates="warehouse", passive_deletes=True)
    stock_ledger = relationship("StockLedger", back_populates="warehouse", passive_deletes=True)

class AppUser(Base, UUIDMixin, TimestampMixin):
    """Application User"""
    __tablename__ = "app_user"
    
    username = Column(String(100), unique=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    
    # Relationships
    stock_movements = relationship("StockLedger", back_populates="user")
