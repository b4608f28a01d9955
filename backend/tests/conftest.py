"""
Pytest fixtures for the back-office API tests.

Provides a fresh application (in-memory SQLite) per test, a test client, and
a ``storage`` fixture that runs service-level tests against both the memory
and the SQL backend.
"""

import httpx
import pytest

from puntobazar import create_app
from puntobazar.config import TestConfig
from puntobazar.extensions import db
from puntobazar.services.ai_service import EXTENSION_KEY, TextGenerator
from puntobazar.storage import MemoryStorage, get_storage


@pytest.fixture(scope='function')
def app(tmp_path):
    """Create application for testing."""

    class _Config(TestConfig):
        PUBLIC_FOLDER = str(tmp_path / "public")
        UPLOAD_FOLDER = str(tmp_path / "public" / "uploads")

    app = create_app(_Config)

    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function', params=["memory", "sql"])
def storage(request, app):
    """Same business rules, both storage backends."""
    if request.param == "memory":
        return MemoryStorage()
    return get_storage()


@pytest.fixture(scope='function')
def fake_ai(app):
    """
    Route outbound generation calls to a handler the test controls.

    Usage: fake_ai(lambda request: httpx.Response(200, json={...}))
    """
    calls = []

    def install(handler):
        def _recording(request):
            calls.append(request)
            return handler(request)

        app.extensions[EXTENSION_KEY] = TextGenerator(
            api_key="test-key",
            api_url="https://ai.test/v1/responses",
            model="test-model",
            timeout=5,
            transport=httpx.MockTransport(_recording),
        )
        return calls

    return install


def make_product(storage, **overrides) -> dict:
    """Helper to create a product through the service layer."""
    from puntobazar.services import products_service

    payload = {"nombre": "Taza", "precio": 100, "stock": 10}
    payload.update(overrides)
    return products_service.create_product(storage, payload)
