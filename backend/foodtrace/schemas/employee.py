"""
Employee Schemas
"""

from pydantic import BaseModel, Field
from typing import Optional


class EmployeeBase(BaseModel):
    """Base employee schema"""
    name: str = Field(..., min_length=1, max_length=255)
    role: str = Field(..., min_length=1, max_length=255)


class EmployeeCreate(EmployeeBase):
    """Create employee request"""
    pass


class EmployeeUpdate(BaseModel):
    """Update employee request"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    role: Optional[str] = Field(None, min_length=1, max_length=255)


class EmployeeResponse(EmployeeBase):
    """Employee response"""
    id: int
    org_id: int

    class Config:
        from_attributes = True
