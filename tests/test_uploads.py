import pytest

from digihomes.core import db, storage
from digihomes.houses import repository as houses_repository
from digihomes.uploads import repository

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def images(monkeypatch):
    """In-memory house_images table keyed by id."""
    rows = {}
    calls = {"set_primary": []}

    async def count_images(house_id):
        return sum(1 for r in rows.values() if r["house_id"] == house_id)

    async def insert_image(*, house_id, image_url, is_primary):
        row = {"id": len(rows) + 1, "house_id": house_id, "image_url": image_url, "is_primary": is_primary}
        rows[row["id"]] = row
        return dict(row)

    async def get_image(image_id):
        return rows.get(image_id)

    async def delete_image(image_id):
        return rows.pop(image_id, None)

    async def set_primary_image(*, house_id, image_id):
        calls["set_primary"].append((house_id, image_id))

    monkeypatch.setattr(repository, "count_images", count_images)
    monkeypatch.setattr(repository, "insert_image", insert_image)
    monkeypatch.setattr(repository, "get_image", get_image)
    monkeypatch.setattr(repository, "delete_image", delete_image)
    monkeypatch.setattr(repository, "set_primary_image", set_primary_image)
    return {"rows": rows, "calls": calls}


@pytest.fixture
def house_exists(monkeypatch):
    existing = {1}

    async def fake(house_id):
        return house_id in existing

    monkeypatch.setattr(houses_repository, "house_exists", fake)
    return existing


def _files(*names, content_type="image/png"):
    return [("images", (name, PNG, content_type)) for name in names]


def test_upload_requires_admin(client, uploads_dir):
    resp = client.post("/api/upload/house/1", files=_files("a.png"))

    assert resp.status_code == 401
    assert list(uploads_dir.iterdir()) == []


def test_first_upload_marks_only_first_image_primary(admin_client, uploads_dir, images, house_exists):
    resp = admin_client.post("/api/upload/house/1", files=_files("a.png", "b.png", "c.png"))

    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Images uploaded successfully"
    assert [img["is_primary"] for img in body["images"]] == [True, False, False]
    assert len(list(uploads_dir.iterdir())) == 3
    assert all(img["image_url"].startswith("/uploads/") for img in body["images"])


def test_later_uploads_are_never_primary(admin_client, uploads_dir, images, house_exists):
    admin_client.post("/api/upload/house/1", files=_files("a.png"))

    resp = admin_client.post("/api/upload/house/1", files=_files("b.png", "c.png"))

    assert [img["is_primary"] for img in resp.json()["images"]] == [False, False]


def test_upload_for_missing_house_leaves_no_files(admin_client, uploads_dir, images, house_exists):
    resp = admin_client.post("/api/upload/house/42", files=_files("a.png", "b.png"))

    assert resp.status_code == 404
    assert resp.json()["detail"] == "House not found"
    assert list(uploads_dir.iterdir()) == []
    assert images["rows"] == {}


def test_invalid_type_rolls_back_whole_batch(admin_client, uploads_dir, images, house_exists):
    files = _files("a.png") + [("images", ("notes.txt", b"hello", "text/plain"))]

    resp = admin_client.post("/api/upload/house/1", files=files)

    assert resp.status_code == 400
    assert list(uploads_dir.iterdir()) == []


def test_upload_without_files(admin_client, uploads_dir, images, house_exists):
    assert admin_client.post("/api/upload/house/1").status_code == 400


def test_too_many_files(admin_client, uploads_dir, images, house_exists):
    names = [f"{i}.png" for i in range(11)]

    resp = admin_client.post("/api/upload/house/1", files=_files(*names))

    assert resp.status_code == 400
    assert list(uploads_dir.iterdir()) == []


def test_oversized_file_is_rejected(admin_client, uploads_dir, images, house_exists, monkeypatch):
    monkeypatch.setenv("MAX_UPLOAD_BYTES", "16")

    resp = admin_client.post("/api/upload/house/1", files=_files("a.png"))

    assert resp.status_code == 413


def test_single_upload(admin_client, uploads_dir):
    resp = admin_client.post("/api/upload", files={"image": ("logo.svg", b"<svg/>", "image/svg+xml")})

    assert resp.status_code == 200
    body = resp.json()
    assert body["url"] == f"/uploads/{body['filename']}"
    assert (uploads_dir / body["filename"]).read_bytes() == b"<svg/>"


def test_single_upload_without_file(admin_client, uploads_dir):
    resp = admin_client.post("/api/upload")

    assert resp.status_code == 400
    assert resp.json()["detail"] == "No image file provided"


def test_delete_image_removes_stored_file(admin_client, uploads_dir, images, house_exists):
    uploaded = admin_client.post("/api/upload/house/1", files=_files("a.png")).json()["images"][0]

    resp = admin_client.delete(f"/api/upload/image/{uploaded['id']}")

    assert resp.status_code == 200
    assert list(uploads_dir.iterdir()) == []
    assert admin_client.delete(f"/api/upload/image/{uploaded['id']}").status_code == 404


def test_set_primary_targets_the_image_house(admin_client, images):
    images["rows"][5] = {"id": 5, "house_id": 3, "image_url": "/uploads/x.png", "is_primary": False}

    resp = admin_client.put("/api/upload/image/5/primary")

    assert resp.status_code == 200
    assert images["calls"]["set_primary"] == [(3, 5)]
    assert admin_client.put("/api/upload/image/6/primary").status_code == 404


def test_cloudinary_public_id_from_url():
    url = "https://res.cloudinary.com/demo/image/upload/v1712/digi-homes/abc123.jpg"

    assert storage.public_id_from_url(url) == "digi-homes/abc123"
    assert storage.public_id_from_url("/uploads/abc123.jpg") is None


@pytest.mark.parametrize("url", ["/uploads/../secret.txt", "/uploads/a/b.png", "/uploads/", "/static/a.png"])
def test_local_path_from_url_rejects_foreign_paths(uploads_dir, url):
    assert storage.local_path_from_url(url) is None


def test_local_path_from_url(uploads_dir):
    assert storage.local_path_from_url("/uploads/abc.png") == uploads_dir / "abc.png"


async def test_set_primary_is_one_statement_scoped_to_the_house(monkeypatch):
    calls = []

    async def execute(sql, *args):
        calls.append((" ".join(sql.split()), args))
        return "UPDATE 3"

    monkeypatch.setattr(db, "execute", execute)

    await repository.set_primary_image(house_id=3, image_id=5)

    ((sql, args),) = calls
    assert sql == "UPDATE house_images SET is_primary = (id = $2) WHERE house_id = $1"
    assert args == (3, 5)


def test_storage_failure_returns_generic_error(admin_client, uploads_dir, monkeypatch):
    async def failing_save(file):
        raise storage.StorageError("Cloudinary upload failed: Invalid api_key 1234567890abc")

    monkeypatch.setattr(storage, "save_image", failing_save)
    monkeypatch.setenv("APP_ENV", "production")

    resp = admin_client.post("/api/upload", files={"image": ("a.png", PNG, "image/png")})

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Something went wrong!"}


def test_disk_error_mid_batch_removes_stored_files(admin_client, uploads_dir, images, house_exists, monkeypatch):
    real_save_local = storage._save_local
    saved = []

    def flaky_save_local(data, original_name):
        if saved:
            raise OSError("disk full")
        stored = real_save_local(data, original_name)
        saved.append(stored)
        return stored

    monkeypatch.setattr(storage, "_save_local", flaky_save_local)

    resp = admin_client.post("/api/upload/house/1", files=_files("a.png", "b.png"))

    assert resp.status_code == 500
    assert len(saved) == 1
    assert list(uploads_dir.iterdir()) == []
    assert images["rows"] == {}
