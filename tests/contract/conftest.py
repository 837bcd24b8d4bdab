"""Contract test fixtures: API client bound to the per-test database."""

import pytest
from fastapi.testclient import TestClient

from partnerdesk.main import app
from partnerdesk.services import get_session_factory


@pytest.fixture
def client(session_factory):
    """Test client whose services use the test database.

    The lifespan is not entered, so the configured database is never touched.
    """
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    yield TestClient(app)
    app.dependency_overrides.clear()
