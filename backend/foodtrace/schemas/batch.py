"""
Production Batch Schemas
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date

from foodtrace.schemas.ingredient import IngredientResponse


class BatchIngredientAmount(BaseModel):
    """Quantity of an ingredient consumed by a batch"""
    amount: float = Field(..., gt=0)


class BatchIngredientCreate(BatchIngredientAmount):
    """Ingredient line supplied with a batch"""
    ingredient_id: int


class BatchIngredientResponse(BaseModel):
    """Batch ingredient line"""
    ingredient_id: int
    amount: float

    class Config:
        from_attributes = True


class BatchIngredientDetail(BaseModel):
    """Batch ingredient line with the full ingredient lot"""
    ingredient: IngredientResponse
    amount: float

    class Config:
        from_attributes = True


class BatchBase(BaseModel):
    """Base batch schema"""
    employee: str = Field(..., min_length=1, max_length=255)
    recipe_lotcode: str = Field(..., min_length=1, max_length=255)
    batch_lot_code: str = Field(..., min_length=1, max_length=255)
    date_made: date
    amount_made: str = Field(..., min_length=1, max_length=255)


class BatchCreate(BatchBase):
    """Create batch request with the ingredient lots it consumed"""
    ingredients: List[BatchIngredientCreate] = []


class BatchUpdate(BaseModel):
    """Update batch request; ingredients replaces the whole link set"""
    employee: Optional[str] = Field(None, min_length=1, max_length=255)
    recipe_lotcode: Optional[str] = Field(None, min_length=1, max_length=255)
    batch_lot_code: Optional[str] = Field(None, min_length=1, max_length=255)
    date_made: Optional[date] = None
    amount_made: Optional[str] = Field(None, min_length=1, max_length=255)
    ingredients: Optional[List[BatchIngredientCreate]] = None


class BatchResponse(BatchBase):
    """Batch response"""
    id: int
    org_id: int
    ingredients: List[BatchIngredientResponse] = []

    class Config:
        from_attributes = True
