"""Asset mutations: update, delete with file cleanup, and bulk actions."""

import logging
from pathlib import Path
from typing import Optional

from ..exceptions import StorageError
from ..schemas import AssetResponse, AssetUpdate, BulkAction, BulkOperation, BulkResult
from ..storage import Storage

logger = logging.getLogger(__name__)


class AssetService:
    """Asset writes. Deleting an asset also removes its stored files.

    Only files under ``upload_dir`` are ever removed; a ``filePath`` that
    was edited to point elsewhere is left alone.
    """

    def __init__(self, storage: Storage, upload_dir: str):
        self.storage = storage
        self.upload_dir = Path(upload_dir)

    def update_asset(self, asset_id: int, data: AssetUpdate) -> Optional[AssetResponse]:
        asset = self.storage.update_asset(asset_id, data)
        if asset is not None:
            logger.info(
                "Asset updated",
                extra={"asset_id": asset_id, "fields": sorted(data.model_fields_set)},
            )
        return asset

    def delete_asset(self, asset_id: int) -> bool:
        """Remove the asset's file, thumbnail and row. False if it doesn't exist."""
        asset = self.storage.get_asset(asset_id)
        if asset is None:
            return False

        self._remove_file(asset.file_path)
        if asset.thumbnail_path:
            self._remove_file(asset.thumbnail_path)

        deleted = self.storage.delete_asset(asset_id)
        if deleted:
            logger.info("Asset deleted", extra={"asset_id": asset_id})
        return deleted

    def execute_bulk(self, operation: BulkOperation) -> BulkResult:
        """Apply one action to each id in order.

        Missing ids are skipped for delete. For update they yield a ``None``
        entry in the results so the list lines up with the request.
        """
        results: list = []
        missing = 0

        for asset_id in operation.asset_ids:
            if operation.action == BulkAction.DELETE:
                if not self.delete_asset(asset_id):
                    missing += 1
            elif operation.action == BulkAction.UPDATE:
                updated = self.update_asset(asset_id, operation.data)
                if updated is None:
                    missing += 1
                results.append(updated)

        logger.info(
            "Bulk %s finished",
            operation.action.value,
            extra={"requested": len(operation.asset_ids), "missing": missing},
        )
        return BulkResult(success=True, results=results)

    def _remove_file(self, file_path: str) -> None:
        path = Path(file_path)
        root = self.upload_dir.resolve()
        resolved = path.resolve()
        if root not in resolved.parents:
            logger.warning("Not removing file outside the upload directory", extra={"file_path": file_path})
            return
        try:
            resolved.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove stored file: {file_path}", original_error=e) from e
