"""Schemas for the dev-only seeding endpoints."""

from pydantic import BaseModel, Field

from quill.schemas.auth import UserPublic


class SampleUser(BaseModel):
    """A bundled sample account."""

    name: str
    email: str
    password: str = Field(..., repr=False)


class SampleUserSummary(BaseModel):
    name: str
    email: str


class SampleUsersResponse(BaseModel):
    message: str
    count: int
    users: list[SampleUserSummary]


class RegisteredSample(BaseModel):
    user: UserPublic
    token: str


class FailedSample(BaseModel):
    email: str
    reason: str


class BulkRegisterResults(BaseModel):
    successful: list[RegisteredSample] = Field(default_factory=list)
    failed: list[FailedSample] = Field(default_factory=list)
    total: int


class BulkRegisterResponse(BaseModel):
    message: str
    results: BulkRegisterResults
