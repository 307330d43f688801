"""Tests for upload, asset CRUD, search and bulk endpoints."""

from pathlib import Path

from garage.schemas import AssetCreate
from tests.conftest import make_asset, make_toolkit


def _upload(client, filename="logo.png", content=b"\x89PNG", mime="image/png", **fields):
    data = {"toolkitId": "1"}
    data.update(fields)
    return client.post("/api/upload", data=data, files={"file": (filename, content, mime)})


class TestUpload:

    def test_upload_image(self, client, upload_dir):
        client.post("/api/toolkits", json=make_toolkit())
        resp = _upload(client)
        assert resp.status_code == 201
        data = resp.json()
        assert data["fileType"] == "image"
        assert data["mimeType"] == "image/png"
        assert data["name"] == data["originalName"] == "logo.png"
        assert data["size"] == 4
        assert data["width"] is None
        assert data["height"] is None
        assert data["tags"] == []
        assert data["status"] == ""
        assert Path(data["filePath"]).parent == Path(upload_dir)
        assert Path(data["filePath"]).read_bytes() == b"\x89PNG"

    def test_upload_with_tags_and_status(self, client):
        client.post("/api/toolkits", json=make_toolkit())
        resp = _upload(client, tags=["brand", "hero"], status="draft")
        data = resp.json()
        assert data["tags"] == ["brand", "hero"]
        assert data["status"] == "draft"

    def test_uploaded_file_is_served(self, client):
        client.post("/api/toolkits", json=make_toolkit())
        stored = Path(_upload(client).json()["filePath"]).name
        resp = client.get(f"/uploads/{stored}")
        assert resp.status_code == 200
        assert resp.content == b"\x89PNG"

    def test_upload_without_file_returns_400(self, client):
        client.post("/api/toolkits", json=make_toolkit())
        resp = client.post("/api/upload", data={"toolkitId": "1"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "VALIDATION_ERROR"

    def test_upload_without_toolkit_returns_400(self, client):
        resp = client.post("/api/upload", files={"file": ("a.png", b"x", "image/png")})
        assert resp.status_code == 400

    def test_upload_to_missing_toolkit_returns_404(self, client):
        resp = _upload(client)
        assert resp.status_code == 404
        assert resp.json()["error"] == "TOOLKIT_NOT_FOUND"


class TestAssetCrud:

    def test_get_asset_with_details(self, client):
        client.post("/api/toolkits", json=make_toolkit())
        _upload(client)
        resp = client.get("/api/assets/1")
        assert resp.status_code == 200
        data = resp.json()
        assert data["toolkit"]["name"] == "Brand Kit"
        assert data["folder"] is None
        assert data["user"]["username"] == "admin"
        assert "password" not in data["user"]

    def test_get_missing_asset_returns_404(self, client):
        resp = client.get("/api/assets/99")
        assert resp.status_code == 404
        assert resp.json()["error"] == "ASSET_NOT_FOUND"

    def test_non_integer_id_returns_400(self, client):
        assert client.get("/api/assets/abc").status_code == 400

    def test_update_asset_is_partial(self, client):
        client.post("/api/toolkits", json=make_toolkit())
        _upload(client, tags=["brand"])
        resp = client.put("/api/assets/1", json={"status": "approved"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "approved"
        assert data["tags"] == ["brand"]

    def test_update_rejects_unknown_field(self, client):
        client.post("/api/toolkits", json=make_toolkit())
        _upload(client)
        resp = client.put("/api/assets/1", json={"rating": 5})
        assert resp.status_code == 400
        assert resp.json()["error"] == "VALIDATION_ERROR"

    def test_update_missing_asset_returns_404(self, client):
        assert client.put("/api/assets/99", json={"status": "x"}).status_code == 404

    def test_delete_asset_removes_file(self, client):
        client.post("/api/toolkits", json=make_toolkit())
        path = Path(_upload(client).json()["filePath"])
        resp = client.delete("/api/assets/1")
        assert resp.json() == {"success": True}
        assert not path.exists()
        assert client.get("/api/assets/1").status_code == 404

    def test_delete_missing_asset_returns_404(self, client):
        assert client.delete("/api/assets/99").status_code == 404

    def test_asset_of_deleted_toolkit_is_orphaned(self, client):
        client.post("/api/toolkits", json=make_toolkit())
        _upload(client)
        client.delete("/api/toolkits/1")
        resp = client.get("/api/assets/1")
        assert resp.status_code == 500
        assert resp.json()["error"] == "ORPHANED_REFERENCE"


class TestSearch:

    def test_search_by_text(self, client):
        client.post("/api/toolkits", json=make_toolkit())
        _upload(client, filename="logo.png")
        _upload(client, filename="banner.png")
        resp = client.get("/api/assets/search", params={"q": "LOGO"})
        assert resp.status_code == 200
        assert [a["name"] for a in resp.json()] == ["logo.png"]

    def test_search_by_file_type(self, client):
        client.post("/api/toolkits", json=make_toolkit())
        _upload(client, filename="logo.png")
        _upload(client, filename="logo.mp3", mime="audio/mpeg")
        resp = client.get("/api/assets/search", params={"q": "logo", "fileType": "audio"})
        assert [a["name"] for a in resp.json()] == ["logo.mp3"]

    def test_search_by_tags(self, client):
        client.post("/api/toolkits", json=make_toolkit())
        _upload(client, filename="a.png", tags=["brand"])
        _upload(client, filename="b.png", tags=["print"])
        _upload(client, filename="c.png")
        resp = client.get("/api/assets/search", params={"q": "", "tags": "brand,print"})
        assert [a["name"] for a in resp.json()] == ["a.png", "b.png"]

    def test_tag_pieces_are_matched_verbatim(self, client):
        client.post("/api/toolkits", json=make_toolkit())
        _upload(client, filename="a.png", tags=[" print"])
        _upload(client, filename="b.png", tags=["print"])
        resp = client.get("/api/assets/search", params={"q": "", "tags": "brand, print"})
        assert [a["name"] for a in resp.json()] == ["a.png"]

    def test_unknown_file_type_returns_400(self, client):
        resp = client.get("/api/assets/search", params={"q": "x", "fileType": "hologram"})
        assert resp.status_code == 400


class TestBulk:

    def test_bulk_delete_skips_missing_ids(self, client):
        client.post("/api/toolkits", json=make_toolkit())
        for name in ("a.png", "b.png"):
            _upload(client, filename=name)
        resp = client.post("/api/assets/bulk", json={"action": "delete", "assetIds": [1, 9999]})
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "results": []}
        assert client.get("/api/assets/1").status_code == 404
        assert client.get("/api/assets/2").status_code == 200

    def test_bulk_update_reports_missing_as_null(self, client):
        client.post("/api/toolkits", json=make_toolkit())
        _upload(client)
        resp = client.post(
            "/api/assets/bulk",
            json={"action": "update", "assetIds": [1, 9999], "data": {"status": "approved"}},
        )
        results = resp.json()["results"]
        assert results[0]["status"] == "approved"
        assert results[1] is None

    def test_bulk_update_requires_data(self, client):
        resp = client.post("/api/assets/bulk", json={"action": "update", "assetIds": [1]})
        assert resp.status_code == 400

    def test_bulk_rejects_unknown_action(self, client):
        resp = client.post("/api/assets/bulk", json={"action": "archive", "assetIds": [1]})
        assert resp.status_code == 400


class TestFileSafety:

    def test_delete_leaves_files_outside_upload_dir(self, client, storage, tmp_path):
        outside = tmp_path / "keep.png"
        outside.write_bytes(b"keep")
        client.post("/api/toolkits", json=make_toolkit())
        storage.create_asset(AssetCreate.model_validate(make_asset(filePath=str(outside))))

        resp = client.delete("/api/assets/1")
        assert resp.status_code == 200
        assert outside.exists()
