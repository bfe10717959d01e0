"""Example record schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ExampleRecordCreate(BaseModel):
    """Schema for creating an example record"""

    name: str = Field(..., min_length=1, max_length=255)
    remote_connection_id: Optional[int] = None


class ExampleRecordUpdate(BaseModel):
    """Schema for updating an example record"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    remote_connection_id: Optional[int] = None


class ExampleRecordResponse(BaseModel):
    """Example record response"""

    id: int
    name: str
    remote_connection_id: Optional[int] = None
    results: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
