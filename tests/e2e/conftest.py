"""Fixtures for end-to-end API tests."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from skillswap.domain.value import UserId
from skillswap.interface.api.app import create_app
from tests.conftest import auth_cookie
from tests.di import build_test_container


@pytest.fixture
def app() -> FastAPI:
    """Application served from an all-mock container."""
    return create_app(build_test_container())


@pytest.fixture
def client_for(app):
    """Factory for clients authenticated as a given user."""

    def _client(user_id: UserId | None = None, name: str | None = None) -> TestClient:
        cookies = auth_cookie(user_id, display_name=name) if user_id else None
        return TestClient(app, cookies=cookies)

    return _client
