"""
API v1 Router
Aggregates all v1 endpoints
"""

from fastapi import APIRouter

from foodtrace.api.v1 import auth, orgs, employees, ingredients, recipes, batches, receiving, problems

api_router = APIRouter()

# Include route modules
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(orgs.router, prefix="/orgs", tags=["Organizations"])
api_router.include_router(employees.router, prefix="/employees", tags=["Employees"])
api_router.include_router(ingredients.router, prefix="/ingredients", tags=["Ingredients"])
api_router.include_router(recipes.router, prefix="/recipes", tags=["Recipes"])
api_router.include_router(batches.router, prefix="/batches", tags=["Batches"])
api_router.include_router(receiving.router, prefix="/receiving-logs", tags=["Receiving"])
api_router.include_router(problems.router, prefix="/problem-logs", tags=["Problem Logs"])


@api_router.get("/")
def api_root():
    return {
        "message": "Food Traceability Records API v1",
        "version": "0.1.0",
        "status": "active",
        "endpoints": {
            "auth": "/v1/auth",
            "orgs": "/v1/orgs",
            "employees": "/v1/employees",
            "ingredients": "/v1/ingredients",
            "recipes": "/v1/recipes",
            "batches": "/v1/batches",
            "receiving_logs": "/v1/receiving-logs",
            "problem_logs": "/v1/problem-logs",
            "docs": "/docs"
        }
    }
