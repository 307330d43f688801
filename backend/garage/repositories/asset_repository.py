"""Repository for assets."""

from ..models.asset import Asset
from ..schemas.asset import AssetResponse
from .base import BaseRepository


class AssetRepository(BaseRepository[Asset]):
    model_class = Asset
    response_class = AssetResponse
    renamed_fields = {"metadata": "extra_metadata"}
