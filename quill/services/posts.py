"""Post service: validation, feed queries and owner-or-admin mutations."""

import logging
import math
from typing import Protocol

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from quill.core.errors import NotFoundError, PermissionDeniedError, ValidationFailedError
from quill.models.post import TITLE_MAX_LENGTH, Post

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class Actor(Protocol):
    """The resolved identity a mutation is performed as."""

    id: int
    role: str


def validate_post_fields(title: str | None, content: str | None) -> tuple[str, str]:
    """Return (title, content) trimmed, or raise ValidationFailedError."""
    title = (title or "").strip()
    content = (content or "").strip()
    if not title or not content:
        raise ValidationFailedError("Title and content are required")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationFailedError(
            f"Title cannot exceed {TITLE_MAX_LENGTH} characters"
        )
    return title, content


def can_modify(post: Post, user: Actor) -> bool:
    """Authors may change their own posts; admins may change any post."""
    return post.author_id == user.id or user.role == "admin"


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit > 0 else 0


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def list_posts(
    db: Session,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    search: str | None = None,
    author_id: int | None = None,
) -> tuple[list[Post], int]:
    """
    Return one page of posts (newest first) and the total matching count.

    search matches a case-insensitive substring of the title or content.
    """
    query = db.query(Post)
    search = (search or "").strip()
    if search:
        pattern = f"%{_escape_like(search)}%"
        query = query.filter(
            or_(
                Post.title.ilike(pattern, escape="\\"),
                Post.content.ilike(pattern, escape="\\"),
            )
        )
    if author_id is not None:
        query = query.filter(Post.author_id == author_id)

    total = query.count()
    posts = (
        query.options(joinedload(Post.author))
        .order_by(Post.created_at.desc(), Post.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return posts, total


def get_post(db: Session, post_id: int) -> Post:
    post = (
        db.query(Post)
        .options(joinedload(Post.author))
        .filter(Post.id == post_id)
        .first()
    )
    if post is None:
        raise NotFoundError("Post not found")
    return post


def create_post(db: Session, author: Actor, title: str | None, content: str | None) -> Post:
    title, content = validate_post_fields(title, content)
    post = Post(title=title, content=content, author_id=author.id)
    db.add(post)
    db.commit()
    logger.info("Created post id=%s author_id=%s", post.id, author.id)
    return get_post(db, post.id)


def update_post(
    db: Session,
    post_id: int,
    user: Actor,
    title: str | None,
    content: str | None,
) -> Post:
    """Replace title and content. The author reference never changes."""
    title, content = validate_post_fields(title, content)
    post = get_post(db, post_id)
    if not can_modify(post, user):
        raise PermissionDeniedError("Not authorized to update this post")
    post.title = title
    post.content = content
    db.commit()
    logger.info("Updated post id=%s by user id=%s", post_id, user.id)
    return get_post(db, post_id)


def delete_post(db: Session, post_id: int, user: Actor) -> None:
    post = get_post(db, post_id)
    if not can_modify(post, user):
        raise PermissionDeniedError("Not authorized to delete this post")
    db.delete(post)
    db.commit()
    logger.info("Deleted post id=%s by user id=%s", post_id, user.id)
