"""Folder API: create, read, partial update and delete by id."""

from fastapi import APIRouter, Depends

from ..exceptions import FolderNotFoundError
from ..schemas import FolderCreate, FolderResponse, FolderUpdate
from ..services import FolderService
from ..storage import Storage, get_storage

router = APIRouter(prefix="/api/folders", tags=["folders"])


@router.post("", response_model=FolderResponse, status_code=201)
def create_folder(data: FolderCreate, storage: Storage = Depends(get_storage)):
    """Create a folder; the body must name its ``toolkitId``."""
    return FolderService(storage).create_folder(data)


@router.get("/{folder_id}", response_model=FolderResponse)
def get_folder(folder_id: int, storage: Storage = Depends(get_storage)):
    folder = FolderService(storage).get_folder(folder_id)
    if folder is None:
        raise FolderNotFoundError(folder_id)
    return folder


@router.put("/{folder_id}", response_model=FolderResponse)
def update_folder(folder_id: int, data: FolderUpdate, storage: Storage = Depends(get_storage)):
    folder = FolderService(storage).update_folder(folder_id, data)
    if folder is None:
        raise FolderNotFoundError(folder_id)
    return folder


@router.delete("/{folder_id}")
def delete_folder(folder_id: int, storage: Storage = Depends(get_storage)):
    """Delete the folder row. Assets that were in it keep their folderId."""
    if not FolderService(storage).delete_folder(folder_id):
        raise FolderNotFoundError(folder_id)
    return {"success": True}
