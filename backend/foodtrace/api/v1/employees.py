"""
Employee Endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from foodtrace.core.database import get_db
from foodtrace.core.exceptions import NotFound
from foodtrace.core.security import AuthContext, get_current_org
from foodtrace.schemas.employee import EmployeeCreate, EmployeeUpdate, EmployeeResponse
from foodtrace.schemas.problem import ProblemLogResponse
from foodtrace.services.repository import EmployeeRepository
from foodtrace.services.traceability_service import TraceabilityGraph

router = APIRouter()


@router.post("/", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
def create_employee(
    employee_data: EmployeeCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Create employee"""
    return EmployeeRepository(db).create(auth.org_id, employee_data)


@router.get("/", response_model=List[EmployeeResponse])
def list_employees(
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """List employees"""
    return EmployeeRepository(db).list_all(auth.org_id)


@router.get("/{employee_id}", response_model=EmployeeResponse)
def get_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Get employee by ID"""
    return EmployeeRepository(db).get_by_id(auth.org_id, employee_id)


@router.patch("/{employee_id}", response_model=EmployeeResponse)
def update_employee(
    employee_id: int,
    employee_data: EmployeeUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Update employee"""
    return EmployeeRepository(db).update(auth.org_id, employee_id, employee_data)


@router.delete("/{employee_id}")
def delete_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Delete employee; problem log links to it are removed, the logs stay"""
    if not EmployeeRepository(db).delete(auth.org_id, employee_id):
        raise NotFound("Employee", employee_id)
    return {"deleted": True}


@router.get("/{employee_id}/problem-logs", response_model=List[ProblemLogResponse])
def list_employee_problem_logs(
    employee_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Problem logs the employee is linked to"""
    return TraceabilityGraph(db).employee_problem_logs(auth.org_id, employee_id)
