"""Shared fixtures for web API tests."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from cli.config_models import QuietMindConfig
from web.tokens import TokenService


@pytest.fixture
def jwt_secret():
    return "test-jwt-secret"


@pytest.fixture
def web_config(tmp_path, jwt_secret):
    return QuietMindConfig.from_dict(
        {
            "paths": {"db_path": str(tmp_path / "quietmind.db")},
            "auth": {"jwt_secret": jwt_secret},
            "llm": {"api_key": "sk-test"},
        }
    )


@pytest.fixture
def tokens(jwt_secret):
    return TokenService(jwt_secret)


@pytest.fixture
def auth_headers(tokens):
    return {"Authorization": f"Bearer {tokens.issue(1)}"}


@pytest.fixture
def auth_headers_b(tokens):
    """Second user token for isolation tests."""
    return {"Authorization": f"Bearer {tokens.issue(2)}"}


@pytest.fixture
def expired_headers(tokens):
    issued = datetime.now(timezone.utc) - timedelta(days=30)
    return {"Authorization": f"Bearer {tokens.issue(1, now=issued)}"}


@pytest.fixture
def web_store(web_config):
    from mood import MoodStore

    return MoodStore(web_config.paths.db_path)


@pytest.fixture
def insight_stub(make_generator):
    return make_generator()


@pytest.fixture
def client(web_config, insight_stub):
    """Test client on a temp database with the insight generator stubbed out."""
    from web.app import app
    from web.deps import get_config, get_insight_generator

    app.dependency_overrides[get_config] = lambda: web_config
    app.dependency_overrides[get_insight_generator] = lambda: insight_stub

    yield TestClient(app)

    app.dependency_overrides.clear()
