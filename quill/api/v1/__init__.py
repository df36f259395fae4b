"""API v1 routes."""

from fastapi import APIRouter

from quill.api.v1 import auth, health, posts, seeding, users


def build_router(include_seeding: bool = False) -> APIRouter:
    """Assemble the v1 router; the seeding routes are opt-in."""
    router = APIRouter()
    router.include_router(health.router, prefix="/health", tags=["health"])
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(users.router, prefix="/users", tags=["users"])
    router.include_router(posts.router, prefix="/posts", tags=["posts"])
    if include_seeding:
        router.include_router(seeding.router, prefix="/test", tags=["test"])
    return router
