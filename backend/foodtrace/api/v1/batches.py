"""
Production Batch Endpoints
Batches and the ingredient lots they consumed
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from foodtrace.core.database import get_db
from foodtrace.core.exceptions import NotFound
from foodtrace.core.security import AuthContext, get_current_org
from foodtrace.schemas.batch import (
    BatchCreate,
    BatchUpdate,
    BatchResponse,
    BatchIngredientAmount,
    BatchIngredientResponse,
    BatchIngredientDetail,
)
from foodtrace.services.production_service import BatchRepository
from foodtrace.services.traceability_service import TraceabilityGraph

router = APIRouter()


@router.post("/", response_model=BatchResponse, status_code=status.HTTP_201_CREATED)
def create_batch(
    batch_data: BatchCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """
    Record a production batch
    The batch and every ingredient line are written together or not at all
    """
    return BatchRepository(db).create(auth.org_id, batch_data)


@router.get("/", response_model=List[BatchResponse])
def list_batches(
    recipe_lotcode: Optional[str] = None,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """
    List batches

    Query params:
    - recipe_lotcode: only batches made from this recipe lot
    """
    repo = BatchRepository(db)
    if recipe_lotcode is not None:
        return repo.list_by_recipe_lotcode(auth.org_id, recipe_lotcode)
    return repo.list_all(auth.org_id)


@router.get("/{batch_id}", response_model=BatchResponse)
def get_batch(
    batch_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Get batch by ID"""
    return BatchRepository(db).get_by_id(auth.org_id, batch_id)


@router.patch("/{batch_id}", response_model=BatchResponse)
def update_batch(
    batch_id: int,
    batch_data: BatchUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Update batch; ingredients, when given, replaces every line"""
    return BatchRepository(db).update(auth.org_id, batch_id, batch_data)


@router.delete("/{batch_id}")
def delete_batch(
    batch_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Delete batch and its ingredient lines"""
    if not BatchRepository(db).delete(auth.org_id, batch_id):
        raise NotFound("Batch", batch_id)
    return {"deleted": True}


@router.get("/{batch_id}/ingredients", response_model=List[BatchIngredientDetail])
def list_batch_ingredients(
    batch_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Ingredient lots consumed by the batch, with amounts"""
    return TraceabilityGraph(db).batch_ingredients(auth.org_id, batch_id)


@router.put("/{batch_id}/ingredients/{ingredient_id}", response_model=BatchIngredientResponse)
def link_batch_ingredient(
    batch_id: int,
    ingredient_id: int,
    line: BatchIngredientAmount,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Add an ingredient line, or replace the amount of an existing one"""
    return TraceabilityGraph(db).link_batch_ingredient(auth.org_id, batch_id, ingredient_id, line.amount)


@router.delete("/{batch_id}/ingredients/{ingredient_id}")
def unlink_batch_ingredient(
    batch_id: int,
    ingredient_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Remove an ingredient line from the batch"""
    removed = TraceabilityGraph(db).unlink_batch_ingredient(auth.org_id, batch_id, ingredient_id)
    return {"deleted": removed}
