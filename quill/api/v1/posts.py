"""Posts endpoints: public feed and reads, author-or-admin writes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from quill.api.v1.deps import get_current_user, to_http_error
from quill.core.database import get_db
from quill.core.errors import QuillError
from quill.models import MAX_ID
from quill.schemas.auth import CurrentUser
from quill.schemas.posts import (
    MessageResponse,
    Pagination,
    PostListResponse,
    PostMutationResponse,
    PostOut,
    PostResponse,
    PostWrite,
)
from quill.services import posts as post_service

router = APIRouter()

PostId = Annotated[int, Path(ge=1, le=MAX_ID)]


@router.get("", response_model=PostListResponse)
def list_posts(
    db: Annotated[Session, Depends(get_db)],
    page: Annotated[int, Query(ge=1, le=MAX_ID)] = 1,
    limit: Annotated[int, Query(ge=1, le=post_service.MAX_PAGE_SIZE)] = post_service.DEFAULT_PAGE_SIZE,
    search: str = "",
    author: Annotated[int | None, Query(ge=1, le=MAX_ID)] = None,
) -> PostListResponse:
    """
    Return a page of posts, newest first, with pagination metadata.

    search filters on a case-insensitive substring of title or content;
    author filters by the author's user id.
    """
    posts, total = post_service.list_posts(
        db, page=page, limit=limit, search=search, author_id=author
    )
    return PostListResponse(
        posts=[PostOut.model_validate(p) for p in posts],
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            pages=post_service.page_count(total, limit),
        ),
    )


@router.post("", response_model=PostMutationResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    body: PostWrite,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> PostMutationResponse:
    """Create a post authored by the current user."""
    try:
        post = post_service.create_post(db, current_user, body.title, body.content)
    except QuillError as e:
        raise to_http_error(e) from e
    return PostMutationResponse(
        message="Post created successfully",
        post=PostOut.model_validate(post),
    )


@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: PostId,
    db: Annotated[Session, Depends(get_db)],
) -> PostResponse:
    try:
        post = post_service.get_post(db, post_id)
    except QuillError as e:
        raise to_http_error(e) from e
    return PostResponse(post=PostOut.model_validate(post))


@router.put("/{post_id}", response_model=PostMutationResponse)
def update_post(
    post_id: PostId,
    body: PostWrite,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> PostMutationResponse:
    """Replace title and content. Only the author or an admin may do this."""
    try:
        post = post_service.update_post(
            db, post_id, current_user, body.title, body.content
        )
    except QuillError as e:
        raise to_http_error(e) from e
    return PostMutationResponse(
        message="Post updated successfully",
        post=PostOut.model_validate(post),
    )


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: PostId,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a post. Only the author or an admin may do this."""
    try:
        post_service.delete_post(db, post_id, current_user)
    except QuillError as e:
        raise to_http_error(e) from e
    return MessageResponse(message="Post deleted successfully")
