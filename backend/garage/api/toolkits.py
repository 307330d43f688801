"""Toolkit API: CRUD plus the folders and assets listed under a toolkit.

Endpoints are thin: reads go through QueryService for the joined views,
writes through ToolkitService / FolderService.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..core.auth import AuthContext, get_current_user
from ..exceptions import ToolkitNotFoundError
from ..schemas import (
    AssetWithDetails,
    FolderCreate,
    FolderResponse,
    ToolkitCreate,
    ToolkitResponse,
    ToolkitUpdate,
    ToolkitWithFolders,
)
from ..services import FolderService, QueryService, ToolkitService
from ..storage import Storage, get_storage

router = APIRouter(prefix="/api/toolkits", tags=["toolkits"])


@router.get("", response_model=List[ToolkitWithFolders])
def list_toolkits(
    storage: Storage = Depends(get_storage),
    auth: AuthContext = Depends(get_current_user),
):
    """Sidebar listing: the caller's toolkits with folders and asset counts."""
    return QueryService(storage).get_toolkits(auth.user_id)


@router.post("", response_model=ToolkitResponse, status_code=201)
def create_toolkit(
    data: ToolkitCreate,
    storage: Storage = Depends(get_storage),
    auth: AuthContext = Depends(get_current_user),
):
    return ToolkitService(storage).create_toolkit(data, auth.user_id)


@router.get("/{toolkit_id}", response_model=ToolkitWithFolders)
def get_toolkit(toolkit_id: int, storage: Storage = Depends(get_storage)):
    toolkit = QueryService(storage).get_toolkit(toolkit_id)
    if toolkit is None:
        raise ToolkitNotFoundError(toolkit_id)
    return toolkit


@router.put("/{toolkit_id}", response_model=ToolkitResponse)
def update_toolkit(
    toolkit_id: int,
    data: ToolkitUpdate,
    storage: Storage = Depends(get_storage),
):
    toolkit = ToolkitService(storage).update_toolkit(toolkit_id, data)
    if toolkit is None:
        raise ToolkitNotFoundError(toolkit_id)
    return toolkit


@router.delete("/{toolkit_id}")
def delete_toolkit(toolkit_id: int, storage: Storage = Depends(get_storage)):
    """Delete the toolkit row. Its folders and assets are left in place."""
    if not ToolkitService(storage).delete_toolkit(toolkit_id):
        raise ToolkitNotFoundError(toolkit_id)
    return {"success": True}


# -- Nested collections ---------------------------------------------------

@router.get("/{toolkit_id}/folders", response_model=List[FolderResponse])
def list_toolkit_folders(toolkit_id: int, storage: Storage = Depends(get_storage)):
    return FolderService(storage).list_folders(toolkit_id)


@router.post("/{toolkit_id}/folders", response_model=FolderResponse, status_code=201)
def create_toolkit_folder(
    toolkit_id: int,
    data: FolderCreate,
    storage: Storage = Depends(get_storage),
):
    """Create a folder in this toolkit. A ``toolkitId`` in the body is ignored."""
    data = data.model_copy(update={"toolkit_id": toolkit_id})
    return FolderService(storage).create_folder(data)


@router.get("/{toolkit_id}/assets", response_model=List[AssetWithDetails])
def list_toolkit_assets(
    toolkit_id: int,
    folder_id: Optional[int] = Query(None, alias="folderId"),
    storage: Storage = Depends(get_storage),
):
    """Assets of the toolkit, narrowed to one folder when ``folderId`` is set."""
    return QueryService(storage).get_assets(toolkit_id, folder_id)
