import pytest

from digihomes.core import config
from digihomes.houses import repository as houses_repository
from digihomes.main import app


@pytest.mark.parametrize("path", ["/health", "/api/health"])
def test_health(client, path):
    resp = client.get(path)

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "message": "DIGI Homes API is running"}


def test_unknown_route(client):
    assert client.get("/api/nope").status_code == 404


def test_unhandled_error_returns_generic_500(client, monkeypatch):
    async def boom(filters):
        raise RuntimeError("db exploded")

    monkeypatch.setattr(houses_repository, "list_houses", boom)

    resp = client.get("/api/houses")

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Something went wrong!", "message": "db exploded"}


def test_unhandled_error_hides_message_outside_development(client, monkeypatch):
    async def boom(filters):
        raise RuntimeError("db exploded")

    monkeypatch.setattr(houses_repository, "list_houses", boom)
    monkeypatch.setenv("APP_ENV", "production")

    resp = client.get("/api/houses")

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Something went wrong!"}


def test_uploaded_files_are_served(client):
    path = config.uploads_dir() / "served.txt"
    path.write_text("hi")
    try:
        resp = client.get("/uploads/served.txt")
    finally:
        path.unlink()

    assert resp.status_code == 200
    assert resp.text == "hi"


def test_routes_are_registered():
    paths = set(app.openapi()["paths"])

    for expected in (
        "/api/auth/login",
        "/api/houses/admin/stats",
        "/api/upload/house/{house_id}",
        "/api/newsletter/broadcast",
        "/api/settings/animations",
        "/api/pages/{slug}",
        "/api/reels/reorder/all",
    ):
        assert expected in paths


def test_uploads_dir_defaults_to_working_directory(tmp_path, monkeypatch):
    monkeypatch.delenv("UPLOADS_DIR", raising=False)
    monkeypatch.chdir(tmp_path)

    assert config.uploads_dir().resolve() == (tmp_path / "uploads").resolve()
