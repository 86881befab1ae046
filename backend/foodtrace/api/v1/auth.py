"""
Authentication Endpoints
Handles registration, login, logout and the current organization
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from foodtrace.core.database import get_db
from foodtrace.core.exceptions import AuthenticationFailure
from foodtrace.core.security import AuthContext, get_current_org
from foodtrace.models import AccessToken, Organization
from foodtrace.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from foodtrace.schemas.org import OrgResponse
from foodtrace.services.credential_service import CredentialStore
from foodtrace.services.org_service import OrganizationService
from foodtrace.services.token_service import TokenService

logger = logging.getLogger(__name__)

router = APIRouter()


def _token_response(access_token: AccessToken, org: Organization) -> TokenResponse:
    return TokenResponse(
        token=access_token.token,
        expires_at=access_token.expires_at,
        organization=OrgResponse.model_validate(org)
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new organization
    Returns a bearer token for it
    """
    org = OrganizationService(db).register(request)
    access_token = TokenService(db).issue(org.id)
    return _token_response(access_token, org)


@router.post("/login", response_model=TokenResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    """
    Login with email and password
    Returns a bearer token
    """
    org_id = CredentialStore(db).authenticate(request.email, request.password)

    if org_id is None:
        logger.warning("Failed login attempt")
        raise AuthenticationFailure("Invalid credentials")

    access_token = TokenService(db).issue(org_id)
    org = db.get(Organization, org_id)
    logger.info(f"Organization {org_id} logged in")
    return _token_response(access_token, org)


@router.post("/logout")
def logout(auth: AuthContext = Depends(get_current_org), db: Session = Depends(get_db)):
    """Revoke the presented token"""
    TokenService(db).revoke(auth.token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=OrgResponse)
def get_current_org_info(auth: AuthContext = Depends(get_current_org), db: Session = Depends(get_db)):
    """Get the authenticated organization"""
    return OrganizationService(db).get_by_id(auth.org_id, auth.org_id)
