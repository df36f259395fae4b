"""Request/response schemas for posts and the paginated feed."""

from datetime import datetime

from pydantic import BaseModel, Field


class PostWrite(BaseModel):
    """Body for creating or replacing a post. Checked by the post service."""

    title: str | None = Field(default=None, description="Title (max 200 characters)")
    content: str | None = Field(default=None, description="Body text")


class AuthorSummary(BaseModel):
    """Public author fields embedded in a post."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str


class PostOut(BaseModel):
    """A post with its author summary (None when the author no longer exists)."""

    model_config = {"from_attributes": True}

    id: int
    title: str
    content: str
    author_id: int
    author: AuthorSummary | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PostResponse(BaseModel):
    post: PostOut


class PostMutationResponse(BaseModel):
    message: str
    post: PostOut


class MessageResponse(BaseModel):
    message: str


class Pagination(BaseModel):
    """Page metadata; pages is ceil(total / limit)."""

    page: int
    limit: int
    total: int
    pages: int


class PostListResponse(BaseModel):
    posts: list[PostOut]
    pagination: Pagination
