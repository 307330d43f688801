"""API routes."""

from .toolkits import router as toolkits_router
from .folders import router as folders_router
from .assets import router as assets_router, upload_router
from .tags import router as tags_router

__all__ = [
    "toolkits_router",
    "folders_router",
    "assets_router",
    "upload_router",
    "tags_router",
]
