"""Pytest fixtures for the Peppa bot tests."""
import sys
import os
import pytest

# Make the card helpers importable from the test modules
sys.path.insert(0, os.path.dirname(__file__))

from peppa.bot_service import create_app
from peppa.config import OracleConfig
from peppa.decision_log import RecordingObserver


@pytest.fixture
def app():
    """Create the bot service app for testing."""
    flask_app = create_app()
    flask_app.config.update({
        'TESTING': True,
    })
    yield flask_app


@pytest.fixture
def client(app):
    """Create Flask test client."""
    return app.test_client()


@pytest.fixture
def recorder():
    return RecordingObserver()


@pytest.fixture
def oracle_config():
    """Short budget so timeout tests finish quickly."""
    return OracleConfig(url="http://oracle.test/decide", api_key="secret",
                        timeout_ms=200, workers=2)
