"""Test configuration and fixtures."""

from uuid import uuid4

import logfire
import pytest

from skillswap.config import Settings
from skillswap.domain.value import UserId
from skillswap.util.jwt import create_token

# Keep spans local; nothing is exported during tests
logfire.configure(send_to_logfire=False, console=False)


def new_user() -> UserId:
    return UserId(uuid4())


def auth_cookie(user_id: UserId, display_name: str | None = None) -> dict[str, str]:
    """Cookie jar entry for an authenticated API call."""
    token = create_token(str(user_id), Settings().auth, display_name=display_name)
    return {"auth_token": token}


@pytest.fixture
def alice() -> UserId:
    """A teacher in most scenarios."""
    return new_user()


@pytest.fixture
def bob() -> UserId:
    """A learner in most scenarios."""
    return new_user()


@pytest.fixture
def carol() -> UserId:
    """Someone outside the match."""
    return new_user()
