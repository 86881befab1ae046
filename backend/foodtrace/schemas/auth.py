"""
Authentication Schemas
Request/response models for auth endpoints
"""

from pydantic import BaseModel, EmailStr, Field
from datetime import datetime

from foodtrace.schemas.org import OrgResponse


class LoginRequest(BaseModel):
    """Login request"""
    email: EmailStr
    password: str


class RegisterRequest(BaseModel):
    """Register a new organization"""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Opaque bearer token response"""
    token: str
    token_type: str = "bearer"
    expires_at: datetime
    organization: OrgResponse
