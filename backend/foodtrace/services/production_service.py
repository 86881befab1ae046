"""
Production Records
Recipes and batches, each written together with its ingredient edges
"""

from typing import Any, Dict, List
import logging

from foodtrace.models import Batch, Recipe
from foodtrace.services.repository import TenantRepository
from foodtrace.services.traceability_service import TraceabilityGraph

logger = logging.getLogger(__name__)


class RecipeRepository(TenantRepository):
    """Recipes with their bill of ingredients (ingredient_ids)"""

    model = Recipe
    entity_name = "Recipe"
    link_fields = ("ingredient_ids",)

    def _write_links(self, org_id: int, obj: Recipe, links: Dict[str, Any]) -> None:
        if links.get("ingredient_ids") is None:
            return
        TraceabilityGraph(self.db).replace_recipe_ingredients(org_id, obj.id, links["ingredient_ids"])

    def list_by_lotcode(self, org_id: int, lotcode: str) -> List[Recipe]:
        return self._query(org_id).filter(Recipe.lotcode == lotcode).order_by(Recipe.id).all()


class BatchRepository(TenantRepository):
    """
    Production batches with the ingredient lots they consumed

    A batch and all of its ingredient lines commit as one transaction.
    """

    model = Batch
    entity_name = "Batch"
    link_fields = ("ingredients",)

    def _write_links(self, org_id: int, obj: Batch, links: Dict[str, Any]) -> None:
        lines = links.get("ingredients")
        if lines is None:
            return
        pairs = [(line["ingredient_id"], line["amount"]) for line in lines]
        TraceabilityGraph(self.db).replace_batch_ingredients(org_id, obj.id, pairs)

    def list_by_recipe_lotcode(self, org_id: int, recipe_lotcode: str) -> List[Batch]:
        return self._query(org_id).filter(
            Batch.recipe_lotcode == recipe_lotcode
        ).order_by(Batch.date_made, Batch.id).all()

