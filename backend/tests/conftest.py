from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from backend.app import create_app
from backend.app.config import Settings


@pytest.fixture()
def settings() -> Settings:
    return Settings(cors_origins=["http://localhost:5173"], log_level="WARNING")


@pytest.fixture()
def client(settings: Settings) -> FlaskClient:
    app = create_app(settings)
    app.config.update(TESTING=True)
    with app.test_client() as test_client:
        yield test_client
