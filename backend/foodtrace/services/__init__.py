"""
Services Package
Authentication core and tenant-scoped record keeping
"""

from foodtrace.services.credential_service import CredentialStore, PasswordHasher, Argon2Hasher
from foodtrace.services.token_service import TokenService
from foodtrace.services.traceability_service import TraceabilityGraph
from foodtrace.services.repository import (
    TenantRepository,
    EmployeeRepository,
    IngredientRepository,
    ReceivingLogRepository,
)
from foodtrace.services.production_service import RecipeRepository, BatchRepository
from foodtrace.services.problem_service import ProblemLogRepository
from foodtrace.services.org_service import OrganizationService

__all__ = [
    "CredentialStore",
    "PasswordHasher",
    "Argon2Hasher",
    "TokenService",
    "TraceabilityGraph",
    "TenantRepository",
    "EmployeeRepository",
    "IngredientRepository",
    "ReceivingLogRepository",
    "RecipeRepository",
    "BatchRepository",
    "ProblemLogRepository",
    "OrganizationService",
]
