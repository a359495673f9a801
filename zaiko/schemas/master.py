"""
Master Data Schemas: Category, Warehouse
"""
from pydantic import BaseModel
from typing import Optional
from uuid import UUID

class CategoryCreate(BaseModel):
    name: str

class CategoryResponse(BaseModel):
    id: UUID
    name: str

    class Config:
        from_attributes = True

class WarehouseCreate(BaseModel):
    name: str
    location: Optional[str] = None

class WarehouseUpdate(BaseModel):
    name: Optional[str] = None
    location: Optional[str] = None

class WarehouseResponse(BaseModel):
    id: UUID
    name: str
    location: Optional[str]

    class Config:
        from_attributes = True
