"""Sample accounts for local development, loaded from the bundled JSON file."""

import json
import logging
from pathlib import Path

from sqlalchemy.orm import Session

from quill.core.errors import ValidationFailedError
from quill.core.security import TokenService
from quill.schemas.auth import UserPublic
from quill.schemas.seed import (
    BulkRegisterResults,
    FailedSample,
    RegisteredSample,
    SampleUser,
)
from quill.services.users import create_user

logger = logging.getLogger(__name__)

SAMPLE_USERS_PATH = Path(__file__).resolve().parent.parent / "data" / "sample_users.json"


def load_sample_users(path: Path = SAMPLE_USERS_PATH) -> list[SampleUser]:
    with path.open(encoding="utf-8") as f:
        return [SampleUser.model_validate(item) for item in json.load(f)]


def register_sample_users(
    db: Session,
    tokens: TokenService,
    samples: list[SampleUser],
) -> BulkRegisterResults:
    """Register each sample; one failure does not stop the rest."""
    results = BulkRegisterResults(total=len(samples))
    for sample in samples:
        try:
            user = create_user(db, sample.name, sample.email, sample.password)
        except ValidationFailedError as e:
            results.failed.append(FailedSample(email=sample.email, reason=e.message))
            continue
        results.successful.append(
            RegisteredSample(user=UserPublic.model_validate(user), token=tokens.issue(user))
        )
    logger.info(
        "Sample registration: successful=%s failed=%s",
        len(results.successful),
        len(results.failed),
    )
    return results
