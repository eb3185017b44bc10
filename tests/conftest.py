import os

# In-memory database for the health check; must be set before the app is imported
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from supervision_api.main import app


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c
