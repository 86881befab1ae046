"""
Tests for the traceability graph: recipe, batch and problem log edges
and the trace queries over them.
"""

import pytest
from sqlalchemy import insert
from datetime import date

from foodtrace.core.exceptions import IntegrityError, NotFound, ValidationError
from foodtrace.models import BatchIngredient, ProblemLogEmployee, RecipeIngredient
from foodtrace.schemas import (
    BatchCreate,
    BatchUpdate,
    EmployeeCreate,
    IngredientCreate,
    ProblemLogCreate,
    RecipeCreate,
    RecipeUpdate,
)
from foodtrace.services import (
    BatchRepository,
    EmployeeRepository,
    IngredientRepository,
    ProblemLogRepository,
    RecipeRepository,
    TraceabilityGraph,
)


def make_recipe(db_session, org_id, ingredient_ids=()):
    return RecipeRepository(db_session).create(org_id, RecipeCreate(
        lotcode="R-BREAD",
        name="Bread",
        date_made=date(2024, 3, 5),
        ingredient_ids=list(ingredient_ids)
    ))


def make_batch(db_session, org_id, lines=(), lot="B-1", made=date(2024, 3, 6)):
    return BatchRepository(db_session).create(org_id, BatchCreate(
        employee="Pat Mixer",
        recipe_lotcode="R-BREAD",
        batch_lot_code=lot,
        date_made=made,
        amount_made="20 loaves",
        ingredients=[{"ingredient_id": i, "amount": a} for i, a in lines]
    ))


class TestRecipeIngredients:
    """Recipe <-> Ingredient edges"""

    def test_link_and_list(self, db_session, seed_org, seed_other_org):
        """Lot L1 linked under org A is listed; org B cannot link to it."""
        ingredient = IngredientRepository(db_session).create(
            seed_org.id, IngredientCreate(lotcode="L1", name="Flour", date=date(2024, 1, 1))
        )
        recipe = make_recipe(db_session, seed_org.id)
        graph = TraceabilityGraph(db_session)

        assert graph.link_recipe_ingredient(seed_org.id, recipe.id, ingredient.id) is True
        assert [i.lotcode for i in graph.recipe_ingredients(seed_org.id, recipe.id)] == ["L1"]

        with pytest.raises(IntegrityError):
            graph.link_recipe_ingredient(seed_other_org.id, recipe.id, ingredient.id)

    def test_link_twice_is_noop(self, db_session, seed_org, seed_ingredients):
        flour, salt = seed_ingredients
        recipe = make_recipe(db_session, seed_org.id)
        graph = TraceabilityGraph(db_session)

        assert graph.link_recipe_ingredient(seed_org.id, recipe.id, flour.id) is True
        assert graph.link_recipe_ingredient(seed_org.id, recipe.id, flour.id) is False
        assert db_session.query(RecipeIngredient).count() == 1

    def test_link_missing_ingredient(self, db_session, seed_org):
        recipe = make_recipe(db_session, seed_org.id)
        with pytest.raises(IntegrityError):
            TraceabilityGraph(db_session).link_recipe_ingredient(seed_org.id, recipe.id, 999)

    def test_link_foreign_ingredient(self, db_session, seed_org, seed_other_org):
        """An ingredient owned by another organization is rejected."""
        foreign = IngredientRepository(db_session).create(
            seed_other_org.id, IngredientCreate(lotcode="X-1", name="Cream", date=date(2024, 1, 1))
        )
        recipe = make_recipe(db_session, seed_org.id)
        with pytest.raises(IntegrityError):
            TraceabilityGraph(db_session).link_recipe_ingredient(seed_org.id, recipe.id, foreign.id)

    def test_create_with_foreign_ingredient(self, db_session, seed_ingredients, seed_other_org):
        flour, salt = seed_ingredients
        with pytest.raises(IntegrityError):
            make_recipe(db_session, seed_other_org.id, [flour.id])

    def test_unlink(self, db_session, seed_org, seed_ingredients):
        flour, salt = seed_ingredients
        recipe = make_recipe(db_session, seed_org.id, [flour.id, salt.id])
        graph = TraceabilityGraph(db_session)

        assert graph.unlink_recipe_ingredient(seed_org.id, recipe.id, flour.id) is True
        assert graph.unlink_recipe_ingredient(seed_org.id, recipe.id, flour.id) is False
        assert [i.id for i in graph.recipe_ingredients(seed_org.id, recipe.id)] == [salt.id]

    def test_replace_on_update(self, db_session, seed_org, seed_ingredients):
        flour, salt = seed_ingredients
        recipe = make_recipe(db_session, seed_org.id, [flour.id])
        recipe = RecipeRepository(db_session).update(seed_org.id, recipe.id, RecipeUpdate(ingredient_ids=[salt.id]))
        assert recipe.ingredient_ids == [salt.id]

    def test_update_without_ids_keeps_links(self, db_session, seed_org, seed_ingredients):
        flour, salt = seed_ingredients
        recipe = make_recipe(db_session, seed_org.id, [flour.id, salt.id])
        recipe = RecipeRepository(db_session).update(seed_org.id, recipe.id, RecipeUpdate(name="Rye"))
        assert recipe.ingredient_ids == [flour.id, salt.id]

    def test_ingredient_recipes(self, db_session, seed_org, seed_ingredients):
        flour, salt = seed_ingredients
        recipe = make_recipe(db_session, seed_org.id, [flour.id])
        graph = TraceabilityGraph(db_session)
        assert [r.id for r in graph.ingredient_recipes(seed_org.id, flour.id)] == [recipe.id]
        assert graph.ingredient_recipes(seed_org.id, salt.id) == []

    def test_list_for_foreign_recipe(self, db_session, seed_org, seed_other_org, seed_ingredients):
        recipe = make_recipe(db_session, seed_org.id)
        with pytest.raises(NotFound):
            TraceabilityGraph(db_session).recipe_ingredients(seed_other_org.id, recipe.id)

    def test_deleting_ingredient_removes_edges(self, db_session, seed_org, seed_ingredients):
        flour, salt = seed_ingredients
        recipe = make_recipe(db_session, seed_org.id, [flour.id, salt.id])
        IngredientRepository(db_session).delete(seed_org.id, flour.id)
        assert RecipeRepository(db_session).get_by_id(seed_org.id, recipe.id).ingredient_ids == [salt.id]


class TestBatchIngredients:
    """Batch <-> Ingredient edges carrying an amount"""

    def test_create_with_lines(self, db_session, seed_org, seed_ingredients):
        flour, salt = seed_ingredients
        batch = make_batch(db_session, seed_org.id, [(flour.id, 12.5), (salt.id, 0.25)])

        lines = TraceabilityGraph(db_session).batch_ingredients(seed_org.id, batch.id)
        assert [(line.ingredient.lotcode, line.amount) for line in lines] == [("FL-100", 12.5), ("SA-200", 0.25)]

    def test_create_is_all_or_nothing(self, db_session, seed_org, seed_ingredients):
        """A bad ingredient line leaves no batch behind."""
        flour, salt = seed_ingredients
        with pytest.raises(IntegrityError):
            make_batch(db_session, seed_org.id, [(flour.id, 1.0), (999, 1.0)])
        assert BatchRepository(db_session).list_all(seed_org.id) == []
        assert db_session.query(BatchIngredient).count() == 0

    def test_duplicate_lines_rejected(self, db_session, seed_org, seed_ingredients):
        flour, salt = seed_ingredients
        with pytest.raises(ValidationError):
            make_batch(db_session, seed_org.id, [(flour.id, 1.0), (flour.id, 2.0)])

    def test_link_upserts_amount(self, db_session, seed_org, seed_ingredients):
        flour, salt = seed_ingredients
        batch = make_batch(db_session, seed_org.id)
        graph = TraceabilityGraph(db_session)

        graph.link_batch_ingredient(seed_org.id, batch.id, flour.id, 3.0)
        link = graph.link_batch_ingredient(seed_org.id, batch.id, flour.id, 4.5)

        assert link.amount == 4.5
        assert db_session.query(BatchIngredient).count() == 1

    @pytest.mark.parametrize("amount", [0, -1.0])
    def test_non_positive_amount(self, db_session, seed_org, seed_ingredients, amount):
        flour, salt = seed_ingredients
        batch = make_batch(db_session, seed_org.id)
        with pytest.raises(ValidationError):
            TraceabilityGraph(db_session).link_batch_ingredient(seed_org.id, batch.id, flour.id, amount)

    def test_link_foreign_batch(self, db_session, seed_org, seed_other_org, seed_ingredients):
        flour, salt = seed_ingredients
        batch = make_batch(db_session, seed_org.id)
        with pytest.raises(IntegrityError):
            TraceabilityGraph(db_session).link_batch_ingredient(seed_other_org.id, batch.id, flour.id, 1.0)

    def test_update_replaces_lines(self, db_session, seed_org, seed_ingredients):
        flour, salt = seed_ingredients
        batch = make_batch(db_session, seed_org.id, [(flour.id, 10.0)])
        batch = BatchRepository(db_session).update(
            seed_org.id, batch.id, BatchUpdate(ingredients=[{"ingredient_id": salt.id, "amount": 2.0}])
        )
        assert [(line.ingredient_id, line.amount) for line in batch.ingredients] == [(salt.id, 2.0)]

    def test_unlink(self, db_session, seed_org, seed_ingredients):
        flour, salt = seed_ingredients
        batch = make_batch(db_session, seed_org.id, [(flour.id, 10.0)])
        graph = TraceabilityGraph(db_session)
        assert graph.unlink_batch_ingredient(seed_org.id, batch.id, flour.id) is True
        assert graph.unlink_batch_ingredient(seed_org.id, batch.id, flour.id) is False

    def test_deleting_batch_removes_lines(self, db_session, seed_org, seed_ingredients):
        flour, salt = seed_ingredients
        batch = make_batch(db_session, seed_org.id, [(flour.id, 10.0)])
        assert BatchRepository(db_session).delete(seed_org.id, batch.id) is True
        assert db_session.query(BatchIngredient).count() == 0
        assert IngredientRepository(db_session).get_by_id(seed_org.id, flour.id).lotcode == "FL-100"


class TestTrace:
    """Forward trace from an ingredient lot to the batches that used it."""

    def test_batches_for_lotcode(self, db_session, seed_org, seed_ingredients):
        flour, salt = seed_ingredients
        early = make_batch(db_session, seed_org.id, [(flour.id, 5.0), (salt.id, 0.1)], lot="B-1", made=date(2024, 3, 6))
        late = make_batch(db_session, seed_org.id, [(flour.id, 5.0)], lot="B-2", made=date(2024, 3, 7))
        make_batch(db_session, seed_org.id, [(salt.id, 0.1)], lot="B-3")

        graph = TraceabilityGraph(db_session)
        assert [b.id for b in graph.batches_for_lotcode(seed_org.id, "FL-100")] == [early.id, late.id]
        assert [b.id for b in graph.ingredient_batches(seed_org.id, flour.id)] == [early.id, late.id]

    def test_unknown_lotcode(self, db_session, seed_org, seed_ingredients):
        assert TraceabilityGraph(db_session).batches_for_lotcode(seed_org.id, "NOPE") == []

    def test_trace_is_tenant_scoped(self, db_session, seed_org, seed_other_org, seed_ingredients):
        flour, salt = seed_ingredients
        make_batch(db_session, seed_org.id, [(flour.id, 5.0)])
        assert TraceabilityGraph(db_session).batches_for_lotcode(seed_other_org.id, "FL-100") == []


class TestProblemEmployees:
    """ProblemLog <-> Employee edges"""

    @pytest.fixture
    def seed_problem(self, db_session, seed_org):
        return ProblemLogRepository(db_session).create(seed_org.id, ProblemLogCreate(
            date_opened=date(2024, 4, 1),
            customer_name="Alex",
            problem_type="foreign object",
            problem_description="Found a twist tie in a loaf"
        ))

    def test_link_and_list_both_ways(self, db_session, seed_org, seed_employee, seed_problem):
        graph = TraceabilityGraph(db_session)
        assert graph.link_problem_employee(seed_org.id, seed_problem.id, seed_employee.id) is True
        assert graph.link_problem_employee(seed_org.id, seed_problem.id, seed_employee.id) is False

        assert [e.id for e in graph.problem_employees(seed_org.id, seed_problem.id)] == [seed_employee.id]
        assert [p.id for p in graph.employee_problem_logs(seed_org.id, seed_employee.id)] == [seed_problem.id]

    def test_link_foreign_employee(self, db_session, seed_org, seed_other_org, seed_problem):
        foreign = EmployeeRepository(db_session).create(
            seed_other_org.id, EmployeeCreate(name="Outsider", role="Clerk")
        )
        with pytest.raises(IntegrityError):
            TraceabilityGraph(db_session).link_problem_employee(seed_org.id, seed_problem.id, foreign.id)

    def test_deleting_employee_keeps_problem_log(self, db_session, seed_org, seed_employee, seed_problem):
        TraceabilityGraph(db_session).link_problem_employee(seed_org.id, seed_problem.id, seed_employee.id)
        EmployeeRepository(db_session).delete(seed_org.id, seed_employee.id)

        assert db_session.query(ProblemLogEmployee).count() == 0
        assert ProblemLogRepository(db_session).get_by_id(seed_org.id, seed_problem.id).employee_ids == []


class TestConcurrentLinks:
    """
    An edge committed by another request between the existence check and
    the insert. The committed row is inserted with a core statement so the
    session's identity map does not know about it.
    """

    def test_recipe_ingredient(self, db_session, seed_org, seed_ingredients, monkeypatch):
        flour, salt = seed_ingredients
        recipe = make_recipe(db_session, seed_org.id)
        db_session.execute(insert(RecipeIngredient.__table__).values(recipe_id=recipe.id, ingredient_id=flour.id))
        db_session.commit()
        monkeypatch.setattr(db_session, "get", lambda *args, **kwargs: None)

        assert TraceabilityGraph(db_session).link_recipe_ingredient(seed_org.id, recipe.id, flour.id) is False
        assert db_session.query(RecipeIngredient).count() == 1

    def test_batch_ingredient_takes_new_amount(self, db_session, seed_org, seed_ingredients, monkeypatch):
        flour, salt = seed_ingredients
        batch = make_batch(db_session, seed_org.id)
        db_session.execute(
            insert(BatchIngredient.__table__).values(batch_id=batch.id, ingredient_id=flour.id, amount=3.0)
        )
        db_session.commit()
        monkeypatch.setattr(db_session, "get", lambda *args, **kwargs: None)

        link = TraceabilityGraph(db_session).link_batch_ingredient(seed_org.id, batch.id, flour.id, 0.25)

        assert link.amount == 0.25
        assert db_session.query(BatchIngredient).count() == 1

    def test_problem_employee(self, db_session, seed_org, seed_employee, monkeypatch):
        problem = ProblemLogRepository(db_session).create(seed_org.id, ProblemLogCreate(
            date_opened=date(2024, 4, 1),
            customer_name="Alex",
            problem_type="mislabel",
            problem_description="Rye sold as wheat"
        ))
        db_session.execute(
            insert(ProblemLogEmployee.__table__).values(problem_log_id=problem.id, employee_id=seed_employee.id)
        )
        db_session.commit()
        monkeypatch.setattr(db_session, "get", lambda *args, **kwargs: None)

        assert TraceabilityGraph(db_session).link_problem_employee(seed_org.id, problem.id, seed_employee.id) is False
        assert db_session.query(ProblemLogEmployee).count() == 1
