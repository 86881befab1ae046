"""
Organization Endpoints
An organization can only read and manage its own record
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from foodtrace.core.database import get_db
from foodtrace.core.exceptions import NotFound
from foodtrace.core.security import AuthContext, get_current_org
from foodtrace.schemas.org import OrgUpdate, OrgResponse
from foodtrace.services.org_service import OrganizationService

router = APIRouter()


@router.get("/", response_model=List[OrgResponse])
def list_orgs(
    auth: AuthContext = Depends(get_current_org),
    db: Session = Depends(get_db)
):
    """List organizations visible to the caller (only itself)"""
    return OrganizationService(db).list_all(auth.org_id)


@router.get("/{org_id}", response_model=OrgResponse)
def get_org(
    org_id: int,
    auth: AuthContext = Depends(get_current_org),
    db: Session = Depends(get_db)
):
    """Get organization by ID"""
    return OrganizationService(db).get_by_id(auth.org_id, org_id)


@router.patch("/{org_id}", response_model=OrgResponse)
def update_org(
    org_id: int,
    org_data: OrgUpdate,
    auth: AuthContext = Depends(get_current_org),
    db: Session = Depends(get_db)
):
    """Update organization; a new password revokes the organization's other tokens"""
    return OrganizationService(db).update(auth.org_id, org_id, org_data, keep_token=auth.token)


@router.delete("/{org_id}")
def delete_org(
    org_id: int,
    auth: AuthContext = Depends(get_current_org),
    db: Session = Depends(get_db)
):
    """Delete organization and every record it owns"""
    if not OrganizationService(db).delete(auth.org_id, org_id):
        raise NotFound("Organization", org_id)
    return {"deleted": True}
