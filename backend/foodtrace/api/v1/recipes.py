"""
Recipe Endpoints
Recipes and their bill of ingredients
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from foodtrace.core.database import get_db
from foodtrace.core.exceptions import NotFound
from foodtrace.core.security import AuthContext, get_current_org
from foodtrace.schemas.ingredient import IngredientResponse
from foodtrace.schemas.recipe import RecipeCreate, RecipeUpdate, RecipeResponse
from foodtrace.services.production_service import RecipeRepository
from foodtrace.services.traceability_service import TraceabilityGraph

router = APIRouter()


@router.post("/", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
def create_recipe(
    recipe_data: RecipeCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Create recipe together with its ingredient links"""
    return RecipeRepository(db).create(auth.org_id, recipe_data)


@router.get("/", response_model=List[RecipeResponse])
def list_recipes(
    lotcode: Optional[str] = None,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """
    List recipes

    Query params:
    - lotcode: only recipes with this lot code
    """
    repo = RecipeRepository(db)
    if lotcode is not None:
        return repo.list_by_lotcode(auth.org_id, lotcode)
    return repo.list_all(auth.org_id)


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(
    recipe_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Get recipe by ID"""
    return RecipeRepository(db).get_by_id(auth.org_id, recipe_id)


@router.patch("/{recipe_id}", response_model=RecipeResponse)
def update_recipe(
    recipe_id: int,
    recipe_data: RecipeUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Update recipe; ingredient_ids, when given, replaces the whole bill"""
    return RecipeRepository(db).update(auth.org_id, recipe_id, recipe_data)


@router.delete("/{recipe_id}")
def delete_recipe(
    recipe_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Delete recipe; its ingredients are kept"""
    if not RecipeRepository(db).delete(auth.org_id, recipe_id):
        raise NotFound("Recipe", recipe_id)
    return {"deleted": True}


@router.get("/{recipe_id}/ingredients", response_model=List[IngredientResponse])
def list_recipe_ingredients(
    recipe_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Ingredients in the recipe"""
    return TraceabilityGraph(db).recipe_ingredients(auth.org_id, recipe_id)


@router.put("/{recipe_id}/ingredients/{ingredient_id}")
def link_recipe_ingredient(
    recipe_id: int,
    ingredient_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Add an ingredient to the recipe; linking twice is a no-op"""
    created = TraceabilityGraph(db).link_recipe_ingredient(auth.org_id, recipe_id, ingredient_id)
    return {"linked": True, "created": created}


@router.delete("/{recipe_id}/ingredients/{ingredient_id}")
def unlink_recipe_ingredient(
    recipe_id: int,
    ingredient_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Remove an ingredient from the recipe"""
    removed = TraceabilityGraph(db).unlink_recipe_ingredient(auth.org_id, recipe_id, ingredient_id)
    return {"deleted": removed}
