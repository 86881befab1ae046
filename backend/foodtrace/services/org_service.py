"""
Organization Service
Registration and self-service management of the tenant record

An authenticated organization can only see and change itself; any other
id is reported as not found.
"""

from sqlalchemy import delete as sa_delete
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from foodtrace.core.database import atomic
from foodtrace.core.exceptions import NotFound, ValidationError
from foodtrace.models import Organization
from foodtrace.schemas.auth import RegisterRequest
from foodtrace.schemas.org import OrgUpdate
from foodtrace.services.credential_service import CredentialStore
from foodtrace.services.token_service import TokenService

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "Email already registered"


class OrganizationService:
    """Organization lifecycle"""

    def __init__(self, db: Session, credentials: Optional[CredentialStore] = None):
        self.db = db
        self.credentials = credentials or CredentialStore(db)

    def register(self, data: RegisterRequest) -> Organization:
        """Create an organization with its credentials in one insert"""
        password_hash, password_salt = self.credentials.derive(data.password)

        org = Organization(
            name=data.name,
            email=data.email,
            password_hash=password_hash,
            password_salt=password_salt
        )
        with atomic(self.db, EMAIL_TAKEN):
            self.db.add(org)

        self.db.refresh(org)
        logger.info(f"Registered organization {org.id}")
        return org

    def get_by_id(self, org_id: int, entity_id: int) -> Organization:
        if entity_id != org_id:
            raise NotFound("Organization", entity_id)
        org = self.db.get(Organization, org_id)
        if org is None:
            raise NotFound("Organization", entity_id)
        return org

    def list_all(self, org_id: int) -> List[Organization]:
        """The caller's own organization"""
        return self.db.query(Organization).filter(Organization.id == org_id).all()

    def update(
        self,
        org_id: int,
        entity_id: int,
        data: OrgUpdate,
        keep_token: Optional[str] = None
    ) -> Organization:
        """
        Update name, email and/or password

        A password change revokes every other token of the organization in
        the same transaction; keep_token (the caller's own) stays valid.
        """
        changes = data.model_dump(exclude_unset=True)
        for name in ("name", "email", "password"):
            if name in changes and changes[name] is None:
                raise ValidationError(f"{name} may not be null")

        password = changes.pop("password", None)
        new_credentials = self.credentials.derive(password) if password else None

        with atomic(self.db, EMAIL_TAKEN):
            org = self.get_by_id(org_id, entity_id)
            for name, value in changes.items():
                setattr(org, name, value)
            if new_credentials:
                org.password_hash, org.password_salt = new_credentials
                revoked = TokenService(self.db).revoke_all_pending(org_id, keep=keep_token)

        if new_credentials:
            logger.info(f"Password changed for organization {org_id}; revoked {revoked} tokens")

        self.db.refresh(org)
        return org

    def delete(self, org_id: int, entity_id: int) -> bool:
        """Delete the organization; the schema cascades to all tenant data"""
        if entity_id != org_id:
            return False

        with atomic(self.db):
            result = self.db.execute(sa_delete(Organization).where(Organization.id == org_id))

        removed = result.rowcount > 0
        if removed:
            logger.info(f"Deleted organization {org_id} and all dependent records")
        return removed
