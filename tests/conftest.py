"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from urllib.parse import urlsplit

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db  # noqa: E402
from storage import get_storage  # noqa: E402


class _BaseTestConfig(Config):
    TESTING = True
    STORAGE_BACKEND = "memory"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    RATE_LIMIT = "1000 per minute"


class _SqlTestConfig(_BaseTestConfig):
    STORAGE_BACKEND = "sql"


def build_test_app(config_class: type[Config] = _BaseTestConfig, **overrides) -> Flask:
    """Create an app from a throwaway subclass carrying ``overrides``."""

    class TestConfig(config_class):
        pass

    for key, value in overrides.items():
        setattr(TestConfig, key, value)

    return create_app(TestConfig)


@pytest.fixture()
def app() -> Flask:
    """Create a Flask application backed by in-memory storage."""

    yield build_test_app()


@pytest.fixture()
def sql_app() -> Flask:
    """Create a Flask application backed by an in-memory SQLite database."""

    application = build_test_app(_SqlTestConfig)

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture(params=["memory", "sql"])
def storage(request):
    """Yield each storage backend inside an application context."""

    config_class = _SqlTestConfig if request.param == "sql" else _BaseTestConfig
    application = build_test_app(config_class)
    with application.app_context():
        yield get_storage()
        if request.param == "sql":
            db.session.remove()
            db.drop_all()


class _AdapterResponse:
    """Expose a Flask test response through the ``requests.Response`` surface."""

    def __init__(self, response):
        self.status_code = response.status_code
        self.text = response.get_data(as_text=True)

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        return json.loads(self.text)


class FlaskTestSession:
    """Route ``requests``-style calls into a Flask test client."""

    def __init__(self, test_client: FlaskClient):
        self._client = test_client
        self.calls: list[tuple[str, str]] = []

    def request(self, method, url, json=None, headers=None, timeout=None):
        path = urlsplit(url).path
        self.calls.append((method, path))
        response = self._client.open(path, method=method, json=json, headers=headers or {})
        return _AdapterResponse(response)


@pytest.fixture()
def http_session(client: FlaskClient) -> FlaskTestSession:
    return FlaskTestSession(client)


@pytest.fixture()
def make_app():
    """Return a factory building apps with config overrides."""

    return build_test_app


@pytest.fixture()
def session_for():
    """Return a factory wrapping any app in a ``FlaskTestSession``."""

    return lambda application: FlaskTestSession(application.test_client())
