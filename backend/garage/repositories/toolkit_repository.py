"""Repository for toolkits."""

from ..models.toolkit import Toolkit
from ..schemas.toolkit import ToolkitResponse
from .base import BaseRepository


class ToolkitRepository(BaseRepository[Toolkit]):
    model_class = Toolkit
    response_class = ToolkitResponse
