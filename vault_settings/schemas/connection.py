"""Connection schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ConnectionCreate(BaseModel):
    """Schema for registering a remote vault connection"""

    api_name: str = Field(..., min_length=1, max_length=100)
    base_url: str = Field(..., pattern="^https?://")
    auth_token: Optional[str] = None


class ConnectionResponse(BaseModel):
    """Connection response (token is never returned)"""

    id: int
    api_name: str
    base_url: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
