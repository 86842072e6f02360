"""SocialHub Backend — Like Schemas."""

from datetime import datetime

from pydantic import BaseModel

from socialhub.schemas.post import PostResponse


class LikeResponse(BaseModel):
    id: int
    user_id: int
    post_id: int
    created_at: datetime

    model_config = {"from_attributes": True}


class LikeToggleResponse(BaseModel):
    liked: bool
    message: str


class MostLikedPost(BaseModel):
    post: PostResponse
    like_count: int
