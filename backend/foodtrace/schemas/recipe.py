"""
Recipe Schemas
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date


class RecipeBase(BaseModel):
    """Base recipe schema"""
    lotcode: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    date_made: date
    description: Optional[str] = None


class RecipeCreate(RecipeBase):
    """Create recipe request, optionally with its bill of ingredients"""
    ingredient_ids: List[int] = []


class RecipeUpdate(BaseModel):
    """Update recipe request; ingredient_ids replaces the whole link set"""
    lotcode: Optional[str] = Field(None, min_length=1, max_length=255)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    date_made: Optional[date] = None
    description: Optional[str] = None
    ingredient_ids: Optional[List[int]] = None


class RecipeResponse(RecipeBase):
    """Recipe response"""
    id: int
    org_id: int
    ingredient_ids: List[int] = []

    class Config:
        from_attributes = True
