"""
Product Schemas
"""
from pydantic import BaseModel
from typing import Optional
from uuid import UUID
from datetime import datetime

from .master import CategoryResponse

class ProductCreate(BaseModel):
    code: str
    name: str
    description: Optional[str] = None
    category_id: Optional[UUID] = None
    unit: str

class ProductUpdate(BaseModel):
    code: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[UUID] = None
    unit: Optional[str] = None

class ProductSummary(BaseModel):
    id: UUID
    code: str
    name: str
    unit: str

    class Config:
        from_attributes = True

class ProductResponse(ProductSummary):
    description: Optional[str]
    category_id: Optional[UUID]
    category: Optional[CategoryResponse] = None
    created_at: Optional[datetime]
