"""Read-side joins over the normalized store.

The store only holds flat rows. This module assembles the shapes the
client renders: assets with their toolkit, folder and owner attached, and
toolkits with their folders and asset count.

Deletes never cascade, so a join can meet a reference whose row is gone.
That is reported as OrphanedReferenceError rather than a partial view.
"""

import logging
from typing import Iterable, List, Optional

from ..exceptions import OrphanedReferenceError
from ..schemas import AssetResponse, AssetWithDetails, FileType, ToolkitResponse, ToolkitWithFolders
from ..storage import Storage

logger = logging.getLogger(__name__)


def matches_search(
    asset: AssetResponse,
    query: str,
    tags: Optional[Iterable[str]] = None,
    file_type: Optional[FileType] = None,
) -> bool:
    """Search predicate for one asset.

    ``query`` is a case-insensitive substring of the name, the original
    name, or any tag. When given, ``file_type`` must match exactly and at
    least one of ``tags`` must appear verbatim in the asset's tags.
    """
    needle = query.lower()
    hit = (
        needle in asset.name.lower()
        or needle in asset.original_name.lower()
        or any(needle in tag.lower() for tag in asset.tags)
    )
    if not hit:
        return False

    if file_type is not None and asset.file_type != file_type:
        return False

    wanted = list(tags or [])
    if wanted and not any(tag in asset.tags for tag in wanted):
        return False

    return True


class QueryService:
    """Denormalized views over the entity store.

    Public methods:
        asset_with_details   -- join one asset row
        get_asset            -- joined asset by id, or None
        get_assets           -- joined assets of a toolkit, optionally one folder
        search_assets        -- joined assets of an owner matching a query
        toolkit_with_folders -- attach folders and asset count to a toolkit
        get_toolkit          -- one toolkit view by id, or None
        get_toolkits         -- sidebar listing for an owner
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    # ------------------------------------------------------------------
    # Assets
    # ------------------------------------------------------------------

    def asset_with_details(self, asset: AssetResponse) -> AssetWithDetails:
        """Attach toolkit, folder (when set) and owner to ``asset``.

        Raises:
            OrphanedReferenceError: a referenced toolkit, folder or user is gone.
        """
        toolkit = self.storage.get_toolkit(asset.toolkit_id)
        if toolkit is None:
            raise self._orphaned(asset, "toolkit_id", asset.toolkit_id)

        folder = None
        if asset.folder_id is not None:
            folder = self.storage.get_folder(asset.folder_id)
            if folder is None:
                raise self._orphaned(asset, "folder_id", asset.folder_id)

        user = self.storage.get_user(asset.user_id)
        if user is None:
            raise self._orphaned(asset, "user_id", asset.user_id)

        return AssetWithDetails(
            **asset.model_dump(),
            toolkit=toolkit,
            folder=folder,
            user=user,
        )

    def get_asset(self, asset_id: int) -> Optional[AssetWithDetails]:
        asset = self.storage.get_asset(asset_id)
        if asset is None:
            return None
        return self.asset_with_details(asset)

    def get_assets(self, toolkit_id: int, folder_id: Optional[int] = None) -> List[AssetWithDetails]:
        """Assets of a toolkit; only those in ``folder_id`` when it is given."""
        assets = self.storage.list_assets(toolkit_id=toolkit_id, folder_id=folder_id)
        return [self.asset_with_details(asset) for asset in assets]

    def search_assets(
        self,
        user_id: int,
        query: str,
        tags: Optional[List[str]] = None,
        file_type: Optional[FileType] = None,
    ) -> List[AssetWithDetails]:
        """Owner's assets matching ``query`` and the optional filters."""
        owned = self.storage.list_assets(user_id=user_id)
        hits = [asset for asset in owned if matches_search(asset, query, tags, file_type)]
        logger.debug(
            "Asset search",
            extra={"user_id": user_id, "query": query, "scanned": len(owned), "matched": len(hits)},
        )
        return [self.asset_with_details(asset) for asset in hits]

    # ------------------------------------------------------------------
    # Toolkits
    # ------------------------------------------------------------------

    def toolkit_with_folders(self, toolkit: ToolkitResponse) -> ToolkitWithFolders:
        folders = self.storage.list_folders(toolkit.id)
        asset_count = len(self.storage.list_assets(toolkit_id=toolkit.id))
        return ToolkitWithFolders(**toolkit.model_dump(), folders=folders, asset_count=asset_count)

    def get_toolkit(self, toolkit_id: int) -> Optional[ToolkitWithFolders]:
        toolkit = self.storage.get_toolkit(toolkit_id)
        if toolkit is None:
            return None
        return self.toolkit_with_folders(toolkit)

    def get_toolkits(self, user_id: int) -> List[ToolkitWithFolders]:
        return [self.toolkit_with_folders(toolkit) for toolkit in self.storage.list_toolkits(user_id)]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _orphaned(asset: AssetResponse, field: str, missing_id: int) -> OrphanedReferenceError:
        logger.warning(
            "Asset references a missing row",
            extra={"asset_id": asset.id, "field": field, "missing_id": missing_id},
        )
        return OrphanedReferenceError(asset.id, field, missing_id)
