"""
Security Module - Bearer Token Authentication
"""

from dataclasses import dataclass
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
import logging

from foodtrace.core.database import get_db
from foodtrace.core.exceptions import AuthenticationFailure
from foodtrace.services.token_service import TokenService

logger = logging.getLogger(__name__)

# HTTP Bearer token; missing headers are reported as 401 below, not 403
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """
    Authenticated identity for one request

    Passed explicitly to every service call; there is no ambient
    "current organization".
    """
    org_id: int
    token: str


def get_current_org(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> AuthContext:
    """
    Resolve the Authorization: Bearer <token> header to an organization

    Raises:
        AuthenticationFailure: header missing, or token unknown, expired or revoked
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationFailure("Not authenticated")

    org_id = TokenService(db).validate(credentials.credentials)
    if org_id is None:
        raise AuthenticationFailure("Invalid or expired token")

    return AuthContext(org_id=org_id, token=credentials.credentials)
