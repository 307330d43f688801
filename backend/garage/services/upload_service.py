"""Upload handling: stream a file to disk and record it as an asset.

Files land in ``upload_dir`` under a random name that keeps the original
extension. The media type is only classified from the MIME type; nothing
opens the file to read dimensions or duration.
"""

import logging
import uuid
from pathlib import Path
from typing import BinaryIO, List, Optional

from ..exceptions import StorageError, ToolkitNotFoundError, UploadTooLargeError, ValidationError
from ..schemas import AssetCreate, AssetResponse, FileType
from ..storage import Storage

DEFAULT_MIME_TYPE = "application/octet-stream"

logger = logging.getLogger(__name__)


def classify_file_type(mime_type: str) -> FileType:
    """Map a MIME type to a FileType.

    Checked in order, so ``image/svg+xml`` counts as an image and only
    other SVG flavours (e.g. ``application/svg+xml``) become vectors.
    """
    if mime_type.startswith("image/"):
        return FileType.IMAGE
    if mime_type.startswith("audio/"):
        return FileType.AUDIO
    if mime_type.startswith("video/"):
        return FileType.VIDEO
    if mime_type == "application/pdf":
        return FileType.PDF
    if "svg" in mime_type:
        return FileType.VECTOR
    return FileType.OTHER


def generate_stored_name(original_name: str) -> str:
    """Random, collision-resistant file name with the original extension."""
    return f"file-{uuid.uuid4().hex}{Path(original_name).suffix}"


class UploadService:

    def __init__(self, storage: Storage, upload_dir: str, max_bytes: int, chunk_bytes: int = 1024 * 1024):
        self.storage = storage
        self.upload_dir = Path(upload_dir)
        self.max_bytes = max_bytes
        self.chunk_bytes = chunk_bytes

    def create_from_upload(
        self,
        source: BinaryIO,
        original_name: str,
        mime_type: Optional[str],
        toolkit_id: int,
        user_id: int,
        folder_id: Optional[int] = None,
        tags: Optional[List[str]] = None,
        status: str = "",
    ) -> AssetResponse:
        """Store the upload and insert its asset row.

        Placement is checked before anything touches the disk.

        Raises:
            ToolkitNotFoundError: ``toolkit_id`` does not exist.
            ValidationError: ``folder_id`` is not a folder of that toolkit.
            UploadTooLargeError: the file exceeds ``max_bytes``.
            StorageError: the file could not be written.
        """
        self._check_placement(toolkit_id, folder_id)

        mime_type = mime_type or DEFAULT_MIME_TYPE
        destination = self.upload_dir / generate_stored_name(original_name)
        size = self._write(source, destination)

        asset = self.storage.create_asset(
            AssetCreate(
                name=original_name,
                original_name=original_name,
                file_type=classify_file_type(mime_type),
                mime_type=mime_type,
                size=size,
                file_path=str(destination),
                toolkit_id=toolkit_id,
                folder_id=folder_id,
                user_id=user_id,
                tags=[tag for tag in (tags or []) if tag],
                status=status or "",
            )
        )
        logger.info(
            "Asset uploaded",
            extra={
                "asset_id": asset.id,
                "toolkit_id": toolkit_id,
                "file_type": asset.file_type.value,
                "size": size,
            },
        )
        return asset

    def _check_placement(self, toolkit_id: int, folder_id: Optional[int]) -> None:
        if self.storage.get_toolkit(toolkit_id) is None:
            raise ToolkitNotFoundError(toolkit_id)
        if folder_id is not None:
            folder = self.storage.get_folder(folder_id)
            if folder is None or folder.toolkit_id != toolkit_id:
                raise ValidationError(
                    f"Folder {folder_id} is not in toolkit {toolkit_id}",
                    field="folderId",
                )

    def _write(self, source: BinaryIO, destination: Path) -> int:
        """Copy ``source`` to ``destination`` in chunks and return the byte count.

        The partial file is removed if the limit is hit or the write fails.
        """
        written = 0
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            with open(destination, "wb") as out:
                while True:
                    chunk = source.read(self.chunk_bytes)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_bytes:
                        raise UploadTooLargeError(self.max_bytes)
                    out.write(chunk)
        except UploadTooLargeError:
            destination.unlink(missing_ok=True)
            logger.warning("Upload rejected: too large", extra={"limit_bytes": self.max_bytes})
            raise
        except OSError as e:
            destination.unlink(missing_ok=True)
            raise StorageError("Failed to store uploaded file", original_error=e) from e
        return written
