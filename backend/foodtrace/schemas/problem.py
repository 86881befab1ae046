"""
Problem Log Schemas
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date


class ProblemLogBase(BaseModel):
    """Base problem log schema"""
    date_opened: date
    customer_name: str = Field(..., min_length=1, max_length=255)
    problem_type: str = Field(..., min_length=1, max_length=100)
    problem_description: str = Field(..., min_length=1)
    recall: bool = False


class ProblemLogCreate(ProblemLogBase):
    """Create problem log request"""
    is_open: bool = True
    date_resolved: Optional[date] = None
    employee_ids: List[int] = []


class ProblemLogUpdate(BaseModel):
    """
    Update problem log request
    Setting is_open to false resolves the log (date_resolved defaults to today)
    """
    date_opened: Optional[date] = None
    customer_name: Optional[str] = Field(None, min_length=1, max_length=255)
    problem_type: Optional[str] = Field(None, min_length=1, max_length=100)
    problem_description: Optional[str] = Field(None, min_length=1)
    recall: Optional[bool] = None
    is_open: Optional[bool] = None
    date_resolved: Optional[date] = None
    employee_ids: Optional[List[int]] = None


class ProblemLogResponse(ProblemLogBase):
    """Problem log response"""
    id: int
    org_id: int
    is_open: bool
    date_resolved: Optional[date] = None
    employee_ids: List[int] = []

    class Config:
        from_attributes = True
