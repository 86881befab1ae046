"""
Receiving Log Endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from foodtrace.core.database import get_db
from foodtrace.core.exceptions import NotFound
from foodtrace.core.security import AuthContext, get_current_org
from foodtrace.schemas.receiving import ReceivingLogCreate, ReceivingLogUpdate, ReceivingLogResponse
from foodtrace.services.repository import ReceivingLogRepository

router = APIRouter()


@router.post("/", response_model=ReceivingLogResponse, status_code=status.HTTP_201_CREATED)
def create_receiving_log(
    log_data: ReceivingLogCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """Record a delivery"""
    return ReceivingLogRepository(db).create(auth.org_id, log_data)


@router.get("/", response_model=List[ReceivingLogResponse])
def list_receiving_logs(
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    """List deliveries, most recent first"""
    return ReceivingLogRepository(db).list_all(auth.org_id)


@router.get("/{log_id}", response_model=ReceivingLogResponse)
def get_receiving_log(
    log_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    return ReceivingLogRepository(db).get_by_id(auth.org_id, log_id)


@router.patch("/{log_id}", response_model=ReceivingLogResponse)
def update_receiving_log(
    log_id: int,
    log_data: ReceivingLogUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    return ReceivingLogRepository(db).update(auth.org_id, log_id, log_data)


@router.delete("/{log_id}")
def delete_receiving_log(
    log_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_org)
):
    if not ReceivingLogRepository(db).delete(auth.org_id, log_id):
        raise NotFound("Receiving log", log_id)
    return {"deleted": True}
