"""
Problem Log Endpoints
Customer complaints, incidents and recalls
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from foodtrace.core.database import get_db
from foodtrace.core.exceptions import NotFound
from foodtrace.core.security import AuthContext, get_current_org
from foodtrace.schemas.employee import EmployeeResponse
from foodtrace.schemas.problem import ProblemLogCreate, ProblemLogUpdate, ProblemLogResponse
from foodtrace.services.problem_service import ProblemLogRepository
from foodtrace.services.traceability_service import TraceabilityGraph

router = APIRouter()


@router.post("/", response_model=ProblemLogResponse, status_code=status.HTTP_201_CREATED)
def create_problem_log(
    log_data: ProblemLogCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Open a problem log, optionally with the employees involved"""
    return ProblemLogRepository(db).create(auth.org_id, log_data)


@router.get("/", response_model=List[ProblemLogResponse])
def list_problem_logs(
    open_only: bool = False,
    recalls_only: bool = False,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """
    List problem logs, newest first

    Query params:
    - open_only: only unresolved logs
    - recalls_only: only logs flagged as recalls
    """
    repo = ProblemLogRepository(db)
    if open_only:
        logs = repo.list_open(auth.org_id)
    elif recalls_only:
        logs = repo.list_recalls(auth.org_id)
    else:
        logs = repo.list_all(auth.org_id)

    if open_only and recalls_only:
        logs = [log for log in logs if log.recall]
    return logs


@router.get("/{log_id}", response_model=ProblemLogResponse)
def get_problem_log(
    log_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Get problem log by ID"""
    return ProblemLogRepository(db).get_by_id(auth.org_id, log_id)


@router.patch("/{log_id}", response_model=ProblemLogResponse)
def update_problem_log(
    log_id: int,
    log_data: ProblemLogUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """
    Update problem log
    Setting is_open to false resolves it; true reopens it
    """
    return ProblemLogRepository(db).update(auth.org_id, log_id, log_data)


@router.delete("/{log_id}")
def delete_problem_log(
    log_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Delete problem log; linked employees are kept"""
    if not ProblemLogRepository(db).delete(auth.org_id, log_id):
        raise NotFound("Problem log", log_id)
    return {"deleted": True}


@router.get("/{log_id}/employees", response_model=List[EmployeeResponse])
def list_problem_log_employees(
    log_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    return TraceabilityGraph(db).problem_employees(auth.org_id, log_id)


@router.put("/{log_id}/employees/{employee_id}")
def link_problem_log_employee(
    log_id: int,
    employee_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Associate an employee with the problem log; linking twice is a no-op"""
    created = TraceabilityGraph(db).link_problem_employee(auth.org_id, log_id, employee_id)
    return {"linked": True, "created": created}


@router.delete("/{log_id}/employees/{employee_id}")
def unlink_problem_log_employee(
    log_id: int,
    employee_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    removed = TraceabilityGraph(db).unlink_problem_employee(auth.org_id, log_id, employee_id)
    return {"deleted": removed}
