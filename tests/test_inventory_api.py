"""HTTP tests for the inventory routes."""

from fastapi.testclient import TestClient

from db.blob_store import BlobStore
from db.record_store import RecordStore

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def _register(client: TestClient, name: str, description: str = "", photo: bytes | None = None):
    files = {"photo": ("tool.png", photo, "image/png")} if photo is not None else None
    data = {"inventory_name": name, "description": description}
    return client.post("/register", data=data, files=files)


def test_register_without_photo(client: TestClient) -> None:
    response = _register(client, "Drill")
    assert response.status_code == 201
    assert response.json() == {"id": 1, "inventory_name": "Drill", "description": "", "photo": None}


def test_register_with_photo(client: TestClient, record_store: RecordStore, blob_store: BlobStore) -> None:
    response = _register(client, "Hammer", "steel", PNG)
    assert response.status_code == 201
    body = response.json()
    stored = record_store.get(body["id"])
    assert stored.photo.endswith(".png")
    assert body["photo"] == f"http://h:1/uploads/{stored.photo}"
    assert blob_store.resolve(stored.photo).read_bytes() == PNG


def test_register_requires_name(client: TestClient, blob_store: BlobStore) -> None:
    response = client.post("/register", data={"description": "x"}, files={"photo": ("a.png", PNG, "image/png")})
    assert response.status_code == 400
    assert response.json()["detail"] == "name is required"
    # Nothing is stored for a rejected registration
    assert [p.name for p in blob_store.root.iterdir()] == ["inventory.json"]


def test_list_items(client: TestClient) -> None:
    assert client.get("/inventory").json() == []
    _register(client, "Drill")
    _register(client, "Hammer", "steel")
    names = [item["inventory_name"] for item in client.get("/inventory").json()]
    assert names == ["Drill", "Hammer"]


def test_get_item(client: TestClient) -> None:
    _register(client, "Drill", "cordless")
    response = client.get("/inventory/1")
    assert response.status_code == 200
    assert response.json()["description"] == "cordless"
    assert client.get("/inventory/2").status_code == 404


def test_update_item_json(client: TestClient) -> None:
    _register(client, "Drill", "cordless")
    response = client.put("/inventory/1", json={"inventory_name": "Impact drill"})
    assert response.status_code == 200
    assert response.json()["inventory_name"] == "Impact drill"
    assert response.json()["description"] == "cordless"


def test_update_item_form(client: TestClient) -> None:
    _register(client, "Drill", "cordless")
    response = client.put("/inventory/1", data={"inventory_name": "", "description": "18V"})
    assert response.status_code == 200
    assert response.json()["inventory_name"] == "Drill"
    assert response.json()["description"] == "18V"


def test_update_missing_item(client: TestClient) -> None:
    assert client.put("/inventory/5", json={"inventory_name": "X"}).status_code == 404


def test_photo_roundtrip(client: TestClient) -> None:
    _register(client, "Drill")
    assert client.get("/inventory/1/photo").status_code == 404

    response = client.put("/inventory/1/photo", files={"photo": ("drill.png", PNG, "image/png")})
    assert response.status_code == 200
    url = response.json()["photo"]
    assert url.startswith("http://h:1/uploads/")

    photo = client.get("/inventory/1/photo")
    assert photo.status_code == 200
    assert photo.content == PNG
    assert photo.headers["content-type"] == "image/png"

    served = client.get(url.replace("http://h:1", ""))
    assert served.status_code == 200
    assert served.content == PNG


def test_set_photo_errors(client: TestClient) -> None:
    assert client.put("/inventory/1/photo", files={"photo": ("a.png", PNG, "image/png")}).status_code == 404
    _register(client, "Drill")
    response = client.put("/inventory/1/photo")
    assert response.status_code == 400
    assert response.json()["detail"] == "No photo"


def test_photo_missing_on_disk(client: TestClient, record_store: RecordStore) -> None:
    item = record_store.create("Drill", photo="123.png")
    assert client.get(f"/inventory/{item.id}/photo").status_code == 404


def test_delete_item(client: TestClient, blob_store: BlobStore, record_store: RecordStore) -> None:
    _register(client, "Drill", photo=PNG)
    photo = record_store.get(1).photo
    response = client.delete("/inventory/1")
    assert response.status_code == 200
    assert response.text == "Deleted"
    assert client.get("/inventory/1").status_code == 404
    assert client.delete("/inventory/1").status_code == 404
    # Photos are not removed with their record
    assert blob_store.exists(photo)


def test_search(client: TestClient) -> None:
    _register(client, "Hammer", "steel", PNG)

    without = client.post("/search", data={"id": "1"})
    assert without.status_code == 200
    assert without.json() == {"id": 1, "inventory_name": "Hammer", "description": "steel"}

    with_photo = client.post("/search", data={"id": "1", "has_photo": "on"})
    assert with_photo.json()["photo"].startswith("http://h:1/uploads/")


def test_search_without_stored_photo_omits_field(client: TestClient) -> None:
    _register(client, "Drill")
    response = client.post("/search", data={"id": "1", "has_photo": "on"})
    assert "photo" not in response.json()


def test_search_not_found(client: TestClient) -> None:
    assert client.post("/search", data={"id": "3"}).status_code == 404
    assert client.post("/search", data={"id": "abc"}).status_code == 404


def test_forms_are_served(client: TestClient) -> None:
    register = client.get("/RegisterForm.html")
    assert register.status_code == 200
    assert 'action="/register"' in register.text
    search = client.get("/SearchForm.html")
    assert search.status_code == 200
    assert 'name="has_photo"' in search.text


def test_uploads_reject_traversal(client: TestClient) -> None:
    assert client.get("/uploads/..%2Finventory.json").status_code == 404


def test_register_accepts_whitespace_name(client: TestClient) -> None:
    response = _register(client, " ")
    assert response.status_code == 201
    assert response.json()["inventory_name"] == " "


def test_upload_failure_returns_500(client: TestClient, blob_store: BlobStore, record_store: RecordStore) -> None:
    for path in blob_store.root.iterdir():
        path.unlink()
    blob_store.root.rmdir()
    blob_store.root.write_bytes(b"not a directory")

    response = _register(client, "Drill", photo=PNG)
    assert response.status_code == 500
    assert response.json()["detail"].startswith("Storage error")


def test_unreadable_inventory_file_returns_500(client: TestClient, record_store: RecordStore) -> None:
    record_store.path.write_text("{not json", encoding="utf-8")
    response = client.get("/inventory")
    assert response.status_code == 500
    assert client.get("/inventory/1").status_code == 500


def test_non_numeric_ids_are_not_found(client: TestClient) -> None:
    _register(client, "Drill")
    assert client.get("/inventory/abc").status_code == 404
    assert client.put("/inventory/abc", json={"inventory_name": "X"}).status_code == 404
    assert client.get("/inventory/abc/photo").status_code == 404
    assert client.put("/inventory/abc/photo", files={"photo": ("a.png", PNG, "image/png")}).status_code == 404
    assert client.delete("/inventory/abc").status_code == 404
    assert client.get("/inventory/1").status_code == 200
