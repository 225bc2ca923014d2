"""
Shared fixtures for adversarial tests.

Provides an HTTP client over the in-memory store for enumeration and
race scenarios. The service fixtures come from tests/conftest.py.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.dependencies import get_auth_service
from src.api.errors import register_error_handlers
from src.api.v1.routes import router
from src.domain.authentication import AuthenticationService


@pytest.fixture
def client(service: AuthenticationService) -> TestClient:
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(router, prefix="/v1")
    app.dependency_overrides[get_auth_service] = lambda: service
    return TestClient(app)
