"""
Ingredient Endpoints
Ingredient lots and the trace queries that start from them
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from foodtrace.core.database import get_db
from foodtrace.core.exceptions import NotFound
from foodtrace.core.security import AuthContext, get_current_org
from foodtrace.schemas.batch import BatchResponse
from foodtrace.schemas.ingredient import IngredientCreate, IngredientUpdate, IngredientResponse
from foodtrace.schemas.recipe import RecipeResponse
from foodtrace.services.repository import IngredientRepository
from foodtrace.services.traceability_service import TraceabilityGraph

router = APIRouter()


@router.post("/", response_model=IngredientResponse, status_code=status.HTTP_201_CREATED)
def create_ingredient(
    ingredient_data: IngredientCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Record a received ingredient lot"""
    return IngredientRepository(db).create(auth.org_id, ingredient_data)


@router.get("/", response_model=List[IngredientResponse])
def list_ingredients(
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """List ingredient lots"""
    return IngredientRepository(db).list_all(auth.org_id)


@router.get("/lot/{lotcode}", response_model=IngredientResponse)
def get_ingredient_by_lotcode(
    lotcode: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Get ingredient by lot code"""
    return IngredientRepository(db).get_by_lotcode(auth.org_id, lotcode)


@router.get("/trace/{lotcode}",response_model=List[BatchResponse])
def trace_lotcode(
    lotcode: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """
    Forward trace for a recall
    Every batch that consumed an ingredient with this lot code
    """
    return TraceabilityGraph(db).batches_for_lotcode(auth.org_id, lotcode)


@router.get("/{ingredient_id}", response_model=IngredientResponse)
def get_ingredient(
    ingredient_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Get ingredient by ID"""
    return IngredientRepository(db).get_by_id(auth.org_id, ingredient_id)


@router.patch("/{ingredient_id}", response_model=IngredientResponse)
def update_ingredient(
    ingredient_id: int,
    ingredient_data: IngredientUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Update ingredient"""
    return IngredientRepository(db).update(auth.org_id, ingredient_id, ingredient_data)


@router.delete("/{ingredient_id}")
def delete_ingredient(
    ingredient_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Delete ingredient; recipe and batch links to it go with it"""
    if not IngredientRepository(db).delete(auth.org_id, ingredient_id):
        raise NotFound("Ingredient", ingredient_id)
    return {"deleted": True}


@router.get("/{ingredient_id}/recipes", response_model=List[RecipeResponse])
def list_ingredient_recipes(
    ingredient_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Recipes that use the ingredient"""
    return TraceabilityGraph(db).ingredient_recipes(auth.org_id, ingredient_id)


@router.get("/{ingredient_id}/batches", response_model=List[BatchResponse])
def list_ingredient_batches(
    ingredient_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Batches that consumed the ingredient lot"""
    return TraceabilityGraph(db).ingredient_batches(auth.org_id, ingredient_id)
