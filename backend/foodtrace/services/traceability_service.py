"""
Traceability Graph
Maintains the many-to-many edges between tenant records and answers
trace queries over them

Edges:
- Recipe <-> Ingredient      (recipe_ingredients)
- Batch <-> Ingredient       (batch_ingredients, with amount)
- ProblemLog <-> Employee    (problem_logs_employees)

Every edge endpoint must belong to the caller's organization. Traversals
join through the link table's primary key or foreign key index, so cost
grows with the edges touched, not the table size.

The replace_* methods do not commit; they run inside the caller's
transaction so a record and its edges land together or not at all.
"""

from sqlalchemy.orm import Session, joinedload
from typing import Iterable, List, Sequence, Tuple
import logging

from foodtrace.core.database import atomic
from foodtrace.core.exceptions import ConflictError, IntegrityError, NotFound, ValidationError
from foodtrace.models import (
    Batch,
    BatchIngredient,
    Employee,
    Ingredient,
    ProblemLog,
    ProblemLogEmployee,
    Recipe,
    RecipeIngredient,
)

logger = logging.getLogger(__name__)


class TraceabilityGraph:
    """Tenant-checked edge maintenance and traversal"""

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Endpoint checks
    # ------------------------------------------------------------------

    def _require_owned(self, model, org_id: int, ids: Iterable[int], entity: str) -> None:
        """Raise IntegrityError unless every id exists under org_id"""
        wanted = set(ids)
        if not wanted:
            return
        found = {
            row_id for (row_id,) in self.db.query(model.id).filter(
                model.id.in_(wanted),
                model.org_id == org_id
            )
        }
        missing = wanted - found
        if missing:
            # Same message for absent and foreign rows
            raise IntegrityError(f"{entity} {sorted(missing)[0]} does not exist")

    def _owned_or_404(self, model, org_id: int, entity_id: int, entity: str):
        obj = self.db.query(model).filter(
            model.id == entity_id,
            model.org_id == org_id
        ).first()
        if obj is None:
            raise NotFound(entity, entity_id)
        return obj

    @staticmethod
    def _unique(ids: Sequence[int]) -> List[int]:
        return list(dict.fromkeys(ids))

    # ------------------------------------------------------------------
    # Recipe <-> Ingredient
    # ------------------------------------------------------------------

    def link_recipe_ingredient(self, org_id: int, recipe_id: int, ingredient_id: int) -> bool:
        """
        Add an ingredient to a recipe

        Returns:
            True if the edge was created, False if it already existed
        """
        try:
            with atomic(self.db):
                self._require_owned(Recipe, org_id, [recipe_id], "Recipe")
                self._require_owned(Ingredient, org_id, [ingredient_id], "Ingredient")
                if self.db.get(RecipeIngredient, (recipe_id, ingredient_id)) is not None:
                    return False
                self.db.add(RecipeIngredient(recipe_id=recipe_id, ingredient_id=ingredient_id))
        except ConflictError:
            # Same edge committed by a concurrent request
            return False

        logger.info(f"Linked ingredient {ingredient_id} to recipe {recipe_id}")
        return True

    def unlink_recipe_ingredient(self, org_id: int, recipe_id: int, ingredient_id: int) -> bool:
        """Remove an ingredient from a recipe; the ingredient itself is kept"""
        with atomic(self.db):
            self._owned_or_404(Recipe, org_id, recipe_id, "Recipe")
            removed = self.db.query(RecipeIngredient).filter(
                RecipeIngredient.recipe_id == recipe_id,
                RecipeIngredient.ingredient_id == ingredient_id
            ).delete(synchronize_session="fetch")
        return removed > 0

    def replace_recipe_ingredients(self, org_id: int, recipe_id: int, ingredient_ids: Sequence[int]) -> None:
        """Make the recipe's ingredient set exactly ingredient_ids (no commit)"""
        ingredient_ids = self._unique(ingredient_ids)
        self._require_owned(Ingredient, org_id, ingredient_ids, "Ingredient")

        current = {
            link.ingredient_id: link
            for link in self.db.query(RecipeIngredient).filter(RecipeIngredient.recipe_id == recipe_id)
        }
        for ingredient_id, link in current.items():
            if ingredient_id not in ingredient_ids:
                self.db.delete(link)
        for ingredient_id in ingredient_ids:
            if ingredient_id not in current:
                self.db.add(RecipeIngredient(recipe_id=recipe_id, ingredient_id=ingredient_id))
        self.db.flush()

    def recipe_ingredients(self, org_id: int, recipe_id: int) -> List[Ingredient]:
        """Ingredients in a recipe's bill"""
        self._owned_or_404(Recipe, org_id, recipe_id, "Recipe")
        return self.db.query(Ingredient).join(
            RecipeIngredient, RecipeIngredient.ingredient_id == Ingredient.id
        ).filter(
            RecipeIngredient.recipe_id == recipe_id,
            Ingredient.org_id == org_id
        ).order_by(Ingredient.id).all()

    def ingredient_recipes(self, org_id: int, ingredient_id: int) -> List[Recipe]:
        """Recipes that use an ingredient"""
        self._owned_or_404(Ingredient, org_id, ingredient_id, "Ingredient")
        return self.db.query(Recipe).join(
            RecipeIngredient, RecipeIngredient.recipe_id == Recipe.id
        ).filter(
            RecipeIngredient.ingredient_id == ingredient_id,
            Recipe.org_id == org_id
        ).order_by(Recipe.id).all()

    # ------------------------------------------------------------------
    # Batch <-> Ingredient
    # ------------------------------------------------------------------

    @staticmethod
    def _check_amount(amount: float) -> None:
        if amount is None or amount <= 0:
            raise ValidationError("Ingredient amount must be greater than zero")

    def link_batch_ingredient(
        self,
        org_id: int,
        batch_id: int,
        ingredient_id: int,
        amount: float
    ) -> BatchIngredient:
        """
        Record that a batch consumed an ingredient lot

        Linking an existing pair replaces its amount.
        """
        self._check_amount(amount)

        try:
            with atomic(self.db):
                self._require_owned(Batch, org_id, [batch_id], "Batch")
                self._require_owned(Ingredient, org_id, [ingredient_id], "Ingredient")
                link = self.db.get(BatchIngredient, (batch_id, ingredient_id))
                if link is None:
                    link = BatchIngredient(batch_id=batch_id, ingredient_id=ingredient_id, amount=amount)
                    self.db.add(link)
                else:
                    link.amount = amount
        except ConflictError:
            # A concurrent request inserted the pair first; overwrite its amount
            with atomic(self.db):
                link = self.db.query(BatchIngredient).filter_by(
                    batch_id=batch_id,
                    ingredient_id=ingredient_id
                ).one()
                link.amount = amount

        self.db.refresh(link)
        logger.info(f"Linked ingredient {ingredient_id} to batch {batch_id} (amount={amount})")
        return link

    def unlink_batch_ingredient(self, org_id: int, batch_id: int, ingredient_id: int) -> bool:
        """Remove an ingredient line from a batch"""
        with atomic(self.db):
            self._owned_or_404(Batch, org_id, batch_id, "Batch")
            removed = self.db.query(BatchIngredient).filter(
                BatchIngredient.batch_id == batch_id,
                BatchIngredient.ingredient_id == ingredient_id
            ).delete(synchronize_session="fetch")
        return removed > 0

    def replace_batch_ingredients(
        self,
        org_id: int,
        batch_id: int,
        lines: Sequence[Tuple[int, float]]
    ) -> None:
        """Make the batch's ingredient lines exactly `lines`, given as (ingredient_id, amount) (no commit)"""
        amounts = {}
        for ingredient_id, amount in lines:
            self._check_amount(amount)
            if ingredient_id in amounts:
                raise ValidationError(f"Ingredient {ingredient_id} listed more than once")
            amounts[ingredient_id] = amount

        self._require_owned(Ingredient, org_id, amounts.keys(), "Ingredient")

        current = {
            link.ingredient_id: link
            for link in self.db.query(BatchIngredient).filter(BatchIngredient.batch_id == batch_id)
        }
        for ingredient_id, link in current.items():
            if ingredient_id not in amounts:
                self.db.delete(link)
            else:
                link.amount = amounts[ingredient_id]
        for ingredient_id, amount in amounts.items():
            if ingredient_id not in current:
                self.db.add(BatchIngredient(batch_id=batch_id, ingredient_id=ingredient_id, amount=amount))
        self.db.flush()

    def batch_ingredients(self, org_id: int, batch_id: int) -> List[BatchIngredient]:
        """Ingredient lines of a batch, with the ingredient lot loaded"""
        self._owned_or_404(Batch, org_id, batch_id, "Batch")
        return self.db.query(BatchIngredient).options(
            joinedload(BatchIngredient.ingredient)
        ).filter(
            BatchIngredient.batch_id == batch_id
        ).order_by(BatchIngredient.ingredient_id).all()

    def ingredient_batches(self, org_id: int, ingredient_id: int) -> List[Batch]:
        """Batches that consumed an ingredient lot"""
        self._owned_or_404(Ingredient, org_id, ingredient_id, "Ingredient")
        return self.db.query(Batch).join(
            BatchIngredient, BatchIngredient.batch_id == Batch.id
        ).filter(
            BatchIngredient.ingredient_id == ingredient_id,
            Batch.org_id == org_id
        ).order_by(Batch.date_made, Batch.id).all()

    def batches_for_lotcode(self, org_id: int, lotcode: str) -> List[Batch]:
        """
        Forward trace: every batch that consumed an ingredient carrying lotcode

        Unknown lot codes yield an empty list.
        """
        return self.db.query(Batch).join(
            BatchIngredient, BatchIngredient.batch_id == Batch.id
        ).join(
            Ingredient, Ingredient.id == BatchIngredient.ingredient_id
        ).filter(
            Ingredient.org_id == org_id,
            Ingredient.lotcode == lotcode,
            Batch.org_id == org_id
        ).distinct().order_by(Batch.date_made, Batch.id).all()

    # ------------------------------------------------------------------
    # ProblemLog <-> Employee
    # ------------------------------------------------------------------

    def link_problem_employee(self, org_id: int, problem_log_id: int, employee_id: int) -> bool:
        """Associate an employee with a problem report"""
        try:
            with atomic(self.db):
                self._require_owned(ProblemLog, org_id, [problem_log_id], "Problem log")
                self._require_owned(Employee, org_id, [employee_id], "Employee")
                if self.db.get(ProblemLogEmployee, (problem_log_id, employee_id)) is not None:
                    return False
                self.db.add(ProblemLogEmployee(problem_log_id=problem_log_id, employee_id=employee_id))
        except ConflictError:
            # Same edge committed by a concurrent request
            return False

        logger.info(f"Linked employee {employee_id} to problem log {problem_log_id}")
        return True

    def unlink_problem_employee(self, org_id: int, problem_log_id: int, employee_id: int) -> bool:
        with atomic(self.db):
            self._owned_or_404(ProblemLog, org_id, problem_log_id, "Problem log")
            removed = self.db.query(ProblemLogEmployee).filter(
                ProblemLogEmployee.problem_log_id == problem_log_id,
                ProblemLogEmployee.employee_id == employee_id
            ).delete(synchronize_session="fetch")
        return removed > 0

    def replace_problem_employees(self, org_id: int, problem_log_id: int, employee_ids: Sequence[int]) -> None:
        """Make the problem log's employee set exactly employee_ids (no commit)"""
        employee_ids = self._unique(employee_ids)
        self._require_owned(Employee, org_id, employee_ids, "Employee")

        current = {
            link.employee_id: link
            for link in self.db.query(ProblemLogEmployee).filter(
                ProblemLogEmployee.problem_log_id == problem_log_id
            )
        }
        for employee_id, link in current.items():
            if employee_id not in employee_ids:
                self.db.delete(link)
        for employee_id in employee_ids:
            if employee_id not in current:
                self.db.add(ProblemLogEmployee(problem_log_id=problem_log_id, employee_id=employee_id))
        self.db.flush()

    def problem_employees(self, org_id: int, problem_log_id: int) -> List[Employee]:
        """Employees linked to a problem report"""
        self._owned_or_404(ProblemLog, org_id, problem_log_id, "Problem log")
        return self.db.query(Employee).join(
            ProblemLogEmployee, ProblemLogEmployee.employee_id == Employee.id
        ).filter(
            ProblemLogEmployee.problem_log_id == problem_log_id,
            Employee.org_id == org_id
        ).order_by(Employee.id).all()

    def employee_problem_logs(self, org_id: int, employee_id: int) -> List[ProblemLog]:
        """Problem reports an employee is linked to"""
        self._owned_or_404(Employee, org_id, employee_id, "Employee")
        return self.db.query(ProblemLog).join(
            ProblemLogEmployee, ProblemLogEmployee.problem_log_id == ProblemLog.id
        ).filter(
            ProblemLogEmployee.employee_id == employee_id,
            ProblemLog.org_id == org_id
        ).order_by(ProblemLog.date_opened, ProblemLog.id).all()
