"""
Models Package
Imports all SQLAlchemy models for the traceability records service
"""

from foodtrace.models.org import Organization
from foodtrace.models.token import AccessToken
from foodtrace.models.employee import Employee
from foodtrace.models.ingredient import Ingredient
from foodtrace.models.recipe import Recipe, RecipeIngredient
from foodtrace.models.batch import Batch, BatchIngredient
from foodtrace.models.receiving import ReceivingLog
from foodtrace.models.problem import ProblemLog, ProblemLogEmployee

__all__ = [
    # Tenancy & auth
    "Organization",
    "AccessToken",

    # Staff
    "Employee",

    # Production
    "Ingredient",
    "Recipe",
    "RecipeIngredient",
    "Batch",
    "BatchIngredient",

    # Logs
    "ReceivingLog",
    "ProblemLog",
    "ProblemLogEmployee",
]
