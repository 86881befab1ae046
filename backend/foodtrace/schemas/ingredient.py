"""
Ingredient Schemas
"""

from pydantic import BaseModel, Field
from typing import Optional
import datetime


class IngredientBase(BaseModel):
    """Base ingredient schema"""
    lotcode: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    date: datetime.date


class IngredientCreate(IngredientBase):
    """Create ingredient request"""
    pass


class IngredientUpdate(BaseModel):
    """Update ingredient request"""
    lotcode: Optional[str] = Field(None, min_length=1, max_length=255)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    date: Optional[datetime.date] = None


class IngredientResponse(IngredientBase):
    """Ingredient response"""
    id: int
    org_id: int

    class Config:
        from_attributes = True
