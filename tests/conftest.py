"""Shared test fixtures for the inquiry relay test suite.

Provides:
- app: Flask app configured for testing (fake Resend key, no network)
- client: Flask test client
- make_app / make_client: apps whose RelaySettings differ from the defaults
- settings: RelaySettings matching TestConfig
- valid_payload: the form body from the landing page happy path
"""

from dataclasses import replace

import pytest

from inquiry_relay import create_app
from inquiry_relay.config import RelaySettings, TestConfig


def build_settings(**overrides):
    """RelaySettings from TestConfig, with selected fields replaced."""
    config = {k: getattr(TestConfig, k) for k in dir(TestConfig) if k.isupper()}
    return replace(RelaySettings.from_mapping(config), **overrides)


@pytest.fixture(scope="session")
def app():
    """Create the Flask application configured for testing."""
    app = create_app("testing")
    yield app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def make_app():
    """Factory: make_app(allowed_origins=(...), api_key=None, ...) -> Flask app."""

    def _make(**overrides):
        return create_app("testing", settings=build_settings(**overrides))

    return _make


@pytest.fixture
def make_client(make_app):
    """Factory: same overrides as make_app, returns a test client."""

    def _make(**overrides):
        return make_app(**overrides).test_client()

    return _make


@pytest.fixture
def settings():
    """RelaySettings matching TestConfig."""
    return build_settings()


@pytest.fixture
def valid_payload():
    return {
        "name": "Jane Doe",
        "company": "Acme Corp",
        "email": "jane@acme.com",
        "country": "USA",
        "products": ["CBB60"],
        "message": "Please send a quote for 50 units.",
    }
