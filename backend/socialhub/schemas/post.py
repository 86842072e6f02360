"""SocialHub Backend — Post Schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from socialhub.schemas.user import UserResponse


class PostRequest(BaseModel):
    content: str = Field(min_length=1, max_length=1000, examples=["Hello, world!"])


class PostResponse(BaseModel):
    """A post with its author embedded and aggregate counters."""
    id: int
    content: str
    created_at: datetime
    updated_at: datetime
    user: UserResponse
    like_count: int = 0
    comment_count: int = 0
