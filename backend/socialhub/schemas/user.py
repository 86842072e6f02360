"""
SocialHub Backend — User Schemas
=================================

What:  Public profile representation and the profile update payload.

UserResponse deliberately has no password field: it is built from the ORM
row with from_attributes, and only the fields declared here are copied.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class UserResponse(BaseModel):
    id: int = Field(description="User identifier")
    username: str
    email: str
    first_name: str
    last_name: str
    bio: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserUpdateRequest(BaseModel):
    """Full replacement of the editable profile fields (PUT semantics)."""
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    bio: Optional[str] = Field(default=None, max_length=500)
