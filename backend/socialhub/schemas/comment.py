"""SocialHub Backend — Comment Schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from socialhub.schemas.user import UserResponse


class CommentRequest(BaseModel):
    content: str = Field(min_length=1, max_length=500, examples=["Amazing post!"])


class CommentResponse(BaseModel):
    id: int
    post_id: int
    content: str
    created_at: datetime
    updated_at: datetime
    user: UserResponse
