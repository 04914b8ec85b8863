import os
import tempfile

# Settings are read from the environment at call time, but the static mount
# needs a directory at import time.
os.environ.setdefault("UPLOADS_DIR", tempfile.mkdtemp(prefix="digihomes-uploads-"))
os.environ["APP_ENV"] = "development"
os.environ["JWT_SECRET"] = "test-secret"
for _name in ("BREVO_API_KEY", "CLOUDINARY_CLOUD_NAME", "CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET"):
    os.environ.pop(_name, None)

import pytest
from fastapi.testclient import TestClient

from digihomes.auth import dependencies
from digihomes.main import app

ADMIN_USER = {
    "id": 1,
    "name": "Admin",
    "email": "admin@digihomes.co.ke",
    "password": "",
    "role": "admin",
    "created_at": None,
}


@pytest.fixture
def client():
    # No `with` block: lifespan (and therefore the DB pool) never starts.
    app.dependency_overrides.clear()
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client):
    app.dependency_overrides[dependencies.get_current_user] = lambda: ADMIN_USER
    return client


@pytest.fixture
def uploads_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("UPLOADS_DIR", str(tmp_path))
    return tmp_path
