"""Unit tests for the upload handler: classification, naming and size limits."""

import io
from pathlib import Path

import pytest

from garage.exceptions import ToolkitNotFoundError, UploadTooLargeError, ValidationError
from garage.schemas import FileType, FolderCreate, ToolkitCreate
from garage.services import UploadService
from garage.services.upload_service import classify_file_type, generate_stored_name


class TestClassifyFileType:

    @pytest.mark.parametrize(
        "mime, expected",
        [
            ("image/png", FileType.IMAGE),
            ("image/svg+xml", FileType.IMAGE),
            ("audio/mpeg", FileType.AUDIO),
            ("video/mp4", FileType.VIDEO),
            ("application/pdf", FileType.PDF),
            ("application/svg+xml", FileType.VECTOR),
            ("application/zip", FileType.OTHER),
        ],
    )
    def test_mime_type_mapping(self, mime, expected):
        assert classify_file_type(mime) == expected


class TestGenerateStoredName:

    def test_keeps_extension(self):
        name = generate_stored_name("Logo Final.PNG")
        assert name.startswith("file-")
        assert name.endswith(".PNG")

    def test_names_are_unique(self):
        assert generate_stored_name("a.png") != generate_stored_name("a.png")

    def test_no_extension(self):
        assert "." not in generate_stored_name("README")


@pytest.fixture()
def toolkit(storage):
    return storage.create_toolkit(ToolkitCreate(name="Brand Kit"), user_id=1)


@pytest.fixture()
def service(storage, tmp_path):
    return UploadService(storage, str(tmp_path), max_bytes=16, chunk_bytes=4)


class TestCreateFromUpload:

    def test_writes_file_and_creates_asset(self, service, toolkit, tmp_path):
        asset = service.create_from_upload(
            io.BytesIO(b"pngbytes"),
            original_name="logo.png",
            mime_type="image/png",
            toolkit_id=toolkit.id,
            user_id=1,
            tags=["brand", ""],
            status="draft",
        )
        assert asset.file_type == FileType.IMAGE
        assert asset.size == 8
        assert asset.name == asset.original_name == "logo.png"
        assert asset.tags == ["brand"]
        assert asset.status == "draft"
        assert Path(asset.file_path).parent == tmp_path
        assert Path(asset.file_path).read_bytes() == b"pngbytes"

    def test_files_are_not_probed(self, service, toolkit):
        asset = service.create_from_upload(
            io.BytesIO(b"video"), "clip.mp4", "video/mp4", toolkit.id, user_id=1
        )
        assert asset.width is None
        assert asset.height is None
        assert asset.duration is None
        assert asset.thumbnail_path is None

    def test_missing_mime_type_is_other(self, service, toolkit):
        asset = service.create_from_upload(io.BytesIO(b"x"), "blob", None, toolkit.id, user_id=1)
        assert asset.mime_type == "application/octet-stream"
        assert asset.file_type == FileType.OTHER

    def test_too_large_is_rejected_and_cleaned_up(self, service, toolkit, storage, tmp_path):
        with pytest.raises(UploadTooLargeError):
            service.create_from_upload(
                io.BytesIO(b"x" * 17), "big.bin", "application/zip", toolkit.id, user_id=1
            )
        assert list(tmp_path.iterdir()) == []
        assert storage.list_assets() == []

    def test_exactly_at_limit_is_accepted(self, service, toolkit):
        asset = service.create_from_upload(
            io.BytesIO(b"x" * 16), "edge.bin", "application/zip", toolkit.id, user_id=1
        )
        assert asset.size == 16

    def test_unknown_toolkit_writes_nothing(self, service, tmp_path):
        with pytest.raises(ToolkitNotFoundError):
            service.create_from_upload(io.BytesIO(b"x"), "a.png", "image/png", 99, user_id=1)
        assert list(tmp_path.iterdir()) == []

    def test_folder_from_other_toolkit_is_rejected(self, service, toolkit, storage):
        other = storage.create_toolkit(ToolkitCreate(name="Other"), user_id=1)
        folder = storage.create_folder(FolderCreate(name="Elsewhere", toolkit_id=other.id))
        with pytest.raises(ValidationError):
            service.create_from_upload(
                io.BytesIO(b"x"), "a.png", "image/png", toolkit.id, user_id=1, folder_id=folder.id
            )
