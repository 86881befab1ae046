"""
Organization Schemas
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class OrgBase(BaseModel):
    """Base org schema"""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr


class OrgUpdate(BaseModel):
    """Update organization request"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=1)


class OrgResponse(OrgBase):
    """Organization response, never includes credential material"""
    id: int
    created_at: datetime

    class Config:
        from_attributes = True
