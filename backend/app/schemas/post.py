"""Post Schemas — response shapes for posts and the public shirts listing."""

from pydantic import BaseModel, Field


class PostResponse(BaseModel):
    id: int
    namepost: str
    description: str
    image: str | None = None
    user_id: int


class PostCreatedResponse(BaseModel):
    message: str
    post_id: int = Field(serialization_alias="postId")
