"""Asset API: search, bulk actions, per-asset CRUD and the upload endpoint.

``/search`` and ``/bulk`` are declared before ``/{asset_id}`` so they are
not captured as ids.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from ..core.auth import AuthContext, get_current_user
from ..core.config import settings
from ..exceptions import AssetNotFoundError, ValidationError
from ..schemas import (
    AssetResponse,
    AssetUpdate,
    AssetWithDetails,
    BulkOperation,
    BulkResult,
    FileType,
)
from ..services import AssetService, QueryService, UploadService
from ..storage import Storage, get_storage

router = APIRouter(prefix="/api/assets", tags=["assets"])
upload_router = APIRouter(prefix="/api/upload", tags=["assets"])


def get_asset_service(storage: Storage = Depends(get_storage)) -> AssetService:
    return AssetService(storage, settings.upload_dir)


def get_upload_service(storage: Storage = Depends(get_storage)) -> UploadService:
    return UploadService(
        storage,
        settings.upload_dir,
        max_bytes=settings.max_upload_bytes,
        chunk_bytes=settings.upload_chunk_bytes,
    )


def _split_tags(raw: Optional[str]) -> List[str]:
    """Split the ``tags`` query value on commas. Pieces are matched verbatim."""
    if not raw:
        return []
    return raw.split(",")


@router.get("/search", response_model=List[AssetWithDetails])
def search_assets(
    q: str = Query("", description="Case-insensitive text matched against name, original name and tags"),
    tags: Optional[str] = Query(None, description="Comma-separated tags; any one must match exactly"),
    file_type: Optional[FileType] = Query(None, alias="fileType"),
    storage: Storage = Depends(get_storage),
    auth: AuthContext = Depends(get_current_user),
):
    """Search the current user's assets."""
    return QueryService(storage).search_assets(auth.user_id, q, _split_tags(tags), file_type)


@router.post("/bulk", response_model=BulkResult)
def bulk_operation(
    operation: BulkOperation,
    service: AssetService = Depends(get_asset_service),
):
    """Delete or update many assets in one request.

    Ids are handled one at a time in request order. Unknown ids are skipped
    on delete and show up as ``null`` in ``results`` on update.
    """
    return service.execute_bulk(operation)


@router.get("/{asset_id}", response_model=AssetWithDetails)
def get_asset(asset_id: int, storage: Storage = Depends(get_storage)):
    asset = QueryService(storage).get_asset(asset_id)
    if asset is None:
        raise AssetNotFoundError(asset_id)
    return asset


@router.put("/{asset_id}", response_model=AssetResponse)
def update_asset(
    asset_id: int,
    data: AssetUpdate,
    service: AssetService = Depends(get_asset_service),
):
    asset = service.update_asset(asset_id, data)
    if asset is None:
        raise AssetNotFoundError(asset_id)
    return asset


@router.delete("/{asset_id}")
def delete_asset(asset_id: int, service: AssetService = Depends(get_asset_service)):
    """Delete the asset together with its stored file and thumbnail."""
    if not service.delete_asset(asset_id):
        raise AssetNotFoundError(asset_id)
    return {"success": True}


# -- Upload -------------------------------------------------------------------

@upload_router.post("", response_model=AssetResponse, status_code=201)
def upload_file(
    file: Optional[UploadFile] = File(None),
    toolkit_id: int = Form(..., alias="toolkitId"),
    folder_id: Optional[int] = Form(None, alias="folderId"),
    tags: Optional[List[str]] = Form(None),
    status: str = Form(""),
    service: UploadService = Depends(get_upload_service),
    auth: AuthContext = Depends(get_current_user),
):
    """Store one uploaded file and create its asset.

    Multipart fields: ``file``, ``toolkitId``, optional ``folderId``,
    repeatable ``tags`` and ``status``.
    """
    if file is None or not file.filename:
        raise ValidationError("No file uploaded", field="file")

    try:
        return service.create_from_upload(
            file.file,
            original_name=file.filename,
            mime_type=file.content_type,
            toolkit_id=toolkit_id,
            user_id=auth.user_id,
            folder_id=folder_id,
            tags=tags,
            status=status,
        )
    finally:
        file.file.close()
