"""Unit tests for JWTService."""

from uuid import uuid4

import pytest

from skillswap.config import AuthSettings
from skillswap.domain.service import JWTService
from skillswap.util.jwt import JWTError


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(AuthSettings(jwt_secret="unit-test-secret-with-enough-length-0001"))


def test_token_round_trip_yields_principal(jwt_service):
    user_id = uuid4()
    token = jwt_service.create_token(
        str(user_id), display_name=None, email="maria@example.com"
    )

    principal = jwt_service.verify(token)

    assert principal.user_id == user_id
    assert principal.name == "maria"


def test_token_signed_with_other_secret_rejected(jwt_service):
    other = JWTService(AuthSettings(jwt_secret="unit-test-secret-with-enough-length-0002"))
    token = other.create_token(str(uuid4()))

    with pytest.raises(JWTError):
        jwt_service.verify(token)
    assert jwt_service.get_principal(token) is None


def test_non_uuid_subject_rejected(jwt_service):
    token = jwt_service.create_token("not-a-uuid")

    with pytest.raises(JWTError):
        jwt_service.verify(token)


def test_missing_token_is_anonymous(jwt_service):
    assert jwt_service.get_principal(None) is None
    assert jwt_service.get_principal("") is None
