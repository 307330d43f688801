"""Tag catalog API."""

from typing import List

from fastapi import APIRouter, Depends

from ..core.auth import AuthContext, get_current_user
from ..exceptions import TagNotFoundError
from ..schemas import TagCreate, TagResponse, TagUpdate
from ..services import TagService
from ..storage import Storage, get_storage

router = APIRouter(prefix="/api/tags", tags=["tags"])


@router.get("", response_model=List[TagResponse])
def list_tags(
    storage: Storage = Depends(get_storage),
    auth: AuthContext = Depends(get_current_user),
):
    return TagService(storage).list_tags(auth.user_id)


@router.post("", response_model=TagResponse, status_code=201)
def create_tag(
    data: TagCreate,
    storage: Storage = Depends(get_storage),
    auth: AuthContext = Depends(get_current_user),
):
    """Add a tag to the catalog. Names are unique across all users (409)."""
    return TagService(storage).create_tag(data, auth.user_id)


@router.get("/{tag_id}", response_model=TagResponse)
def get_tag(tag_id: int, storage: Storage = Depends(get_storage)):
    tag = TagService(storage).get_tag(tag_id)
    if tag is None:
        raise TagNotFoundError(tag_id)
    return tag


@router.put("/{tag_id}", response_model=TagResponse)
def update_tag(tag_id: int, data: TagUpdate, storage: Storage = Depends(get_storage)):
    tag = TagService(storage).update_tag(tag_id, data)
    if tag is None:
        raise TagNotFoundError(tag_id)
    return tag


@router.delete("/{tag_id}")
def delete_tag(tag_id: int, storage: Storage = Depends(get_storage)):
    """Remove a catalog entry. Assets carrying the tag text keep it."""
    if not TagService(storage).delete_tag(tag_id):
        raise TagNotFoundError(tag_id)
    return {"success": True}
