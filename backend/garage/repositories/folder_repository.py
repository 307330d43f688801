"""Repository for folders."""

from ..models.folder import Folder
from ..schemas.folder import FolderResponse
from .base import BaseRepository


class FolderRepository(BaseRepository[Folder]):
    model_class = Folder
    response_class = FolderResponse
