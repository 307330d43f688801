"""Repository for the tag catalog."""

from typing import Optional

from ..models.tag import Tag
from ..schemas.tag import TagResponse
from .base import BaseRepository


class TagRepository(BaseRepository[Tag]):
    model_class = Tag
    response_class = TagResponse

    def get_by_name(self, name: str) -> Optional[Tag]:
        return self._base_query().filter(Tag.name == name).first()
