"""
Receiving Log Schemas
"""

from pydantic import BaseModel, Field
from typing import Optional
import datetime


class ReceivingLogBase(BaseModel):
    """Base receiving log schema"""
    lotcode: str = Field(..., min_length=1, max_length=255)
    company_name: str = Field(..., min_length=1, max_length=255)
    item_name: str = Field(..., min_length=1, max_length=255)
    temperature: str = Field(..., min_length=1, max_length=50)
    date: datetime.date


class ReceivingLogCreate(ReceivingLogBase):
    """Create receiving log request"""
    pass


class ReceivingLogUpdate(BaseModel):
    """Update receiving log request"""
    lotcode: Optional[str] = Field(None, min_length=1, max_length=255)
    company_name: Optional[str] = Field(None, min_length=1, max_length=255)
    item_name: Optional[str] = Field(None, min_length=1, max_length=255)
    temperature: Optional[str] = Field(None, min_length=1, max_length=50)
    date: Optional[datetime.date] = None


class ReceivingLogResponse(ReceivingLogBase):
    """Receiving log response"""
    id: int
    org_id: int

    class Config:
        from_attributes = True
