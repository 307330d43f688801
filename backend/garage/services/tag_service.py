"""Tag catalog operations. The catalog is advisory; asset tags are free text."""

import logging
from typing import List, Optional

from ..schemas import TagCreate, TagResponse, TagUpdate
from ..storage import Storage

logger = logging.getLogger(__name__)


class TagService:

    def __init__(self, storage: Storage):
        self.storage = storage

    def list_tags(self, user_id: int) -> List[TagResponse]:
        return self.storage.list_tags(user_id)

    def get_tag(self, tag_id: int) -> Optional[TagResponse]:
        return self.storage.get_tag(tag_id)

    def create_tag(self, data: TagCreate, user_id: int) -> TagResponse:
        tag = self.storage.create_tag(data, user_id)
        logger.info("Tag created", extra={"tag_id": tag.id, "tag_name": tag.name})
        return tag

    def update_tag(self, tag_id: int, data: TagUpdate) -> Optional[TagResponse]:
        return self.storage.update_tag(tag_id, data)

    def delete_tag(self, tag_id: int) -> bool:
        return self.storage.delete_tag(tag_id)
