"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest

from tests import make_test_store


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests that use the in-memory record store"
    )


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep deployment settings from leaking into tests."""
    monkeypatch.delenv("NOTIFICATION_WEBHOOK_URL", raising=False)
    monkeypatch.delenv("NOTIFICATION_DRY_RUN", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)


@pytest.fixture(scope="function")
def session_factory():
    """Session factory bound to a fresh in-memory SQLite database."""
    engine, factory, _ = make_test_store()
    yield factory
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()
