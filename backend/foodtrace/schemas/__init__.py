"""
Schemas Package
Pydantic models for request/response validation
"""

from foodtrace.schemas.org import (
    OrgUpdate,
    OrgResponse,
)

from foodtrace.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
)

from foodtrace.schemas.employee import (
    EmployeeCreate,
    EmployeeUpdate,
    EmployeeResponse,
)

from foodtrace.schemas.ingredient import (
    IngredientCreate,
    IngredientUpdate,
    IngredientResponse,
)

from foodtrace.schemas.recipe import (
    RecipeCreate,
    RecipeUpdate,
    RecipeResponse,
)

from foodtrace.schemas.batch import (
    BatchCreate,
    BatchUpdate,
    BatchResponse,
    BatchIngredientAmount,
    BatchIngredientCreate,
    BatchIngredientResponse,
    BatchIngredientDetail,
)

from foodtrace.schemas.receiving import (
    ReceivingLogCreate,
    ReceivingLogUpdate,
    ReceivingLogResponse,
)

from foodtrace.schemas.problem import (
    ProblemLogCreate,
    ProblemLogUpdate,
    ProblemLogResponse,
)

__all__ = [
    # Org & Auth
    "OrgUpdate",
    "OrgResponse",
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",

    # Staff
    "EmployeeCreate",
    "EmployeeUpdate",
    "EmployeeResponse",

    # Production
    "IngredientCreate",
    "IngredientUpdate",
    "IngredientResponse",
    "RecipeCreate",
    "RecipeUpdate",
    "RecipeResponse",
    "BatchCreate",
    "BatchUpdate",
    "BatchResponse",
    "BatchIngredientAmount",
    "BatchIngredientCreate",
    "BatchIngredientResponse",
    "BatchIngredientDetail",

    # Logs
    "ReceivingLogCreate",
    "ReceivingLogUpdate",
    "ReceivingLogResponse",
    "ProblemLogCreate",
    "ProblemLogUpdate",
    "ProblemLogResponse",
]
