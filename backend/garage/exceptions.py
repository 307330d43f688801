"""Custom exception hierarchy for the asset garage API."""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    # Lookup errors
    TOOLKIT_NOT_FOUND = "TOOLKIT_NOT_FOUND"
    FOLDER_NOT_FOUND = "FOLDER_NOT_FOUND"
    ASSET_NOT_FOUND = "ASSET_NOT_FOUND"
    TAG_NOT_FOUND = "TAG_NOT_FOUND"

    # Input errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFLICT = "CONFLICT"
    UPLOAD_TOO_LARGE = "UPLOAD_TOO_LARGE"

    # Integrity errors
    ORPHANED_REFERENCE = "ORPHANED_REFERENCE"

    # Storage errors
    STORAGE_ERROR = "STORAGE_ERROR"

    # Generic errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class GarageException(Exception):
    """
    Base exception for all asset garage errors.

    Carries everything the exception handler needs to build a response:
    - Human-readable message
    - Machine-readable error code
    - HTTP status code
    - Optional additional details
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the JSON error body."""
        return {
            "error": self.error_code.value,
            "message": self.message,
            "details": self.details
        }


class _NotFoundError(GarageException):
    """Shared shape of every 404 raised for a missing row."""

    entity = "Entity"
    code = ErrorCode.INTERNAL_ERROR

    def __init__(self, entity_id: int):
        super().__init__(
            f"{self.entity} not found: {entity_id}",
            self.code,
            status_code=404,
            details={"id": entity_id}
        )


class ToolkitNotFoundError(_NotFoundError):
    """Toolkit not found in the store."""
    entity = "Toolkit"
    code = ErrorCode.TOOLKIT_NOT_FOUND


class FolderNotFoundError(_NotFoundError):
    """Folder not found in the store."""
    entity = "Folder"
    code = ErrorCode.FOLDER_NOT_FOUND


class AssetNotFoundError(_NotFoundError):
    """Asset not found in the store."""
    entity = "Asset"
    code = ErrorCode.ASSET_NOT_FOUND


class TagNotFoundError(_NotFoundError):
    """Tag not found in the store."""
    entity = "Tag"
    code = ErrorCode.TAG_NOT_FOUND


class ValidationError(GarageException):
    """Validation failed for user input."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message,
            ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=details
        )


class ConflictError(GarageException):
    """A unique field (username, tag name) is already taken."""

    def __init__(self, field: str, value: str):
        super().__init__(
            f"{field} already exists: {value}",
            ErrorCode.CONFLICT,
            status_code=409,
            details={"field": field, "value": value}
        )


class UploadTooLargeError(GarageException):
    """Uploaded file exceeds the configured size ceiling."""

    def __init__(self, limit_bytes: int):
        super().__init__(
            f"File exceeds the upload limit of {limit_bytes} bytes",
            ErrorCode.UPLOAD_TOO_LARGE,
            status_code=413,
            details={"limit_bytes": limit_bytes}
        )


class OrphanedReferenceError(GarageException):
    """A row points at a parent that no longer exists.

    Deletes never cascade, so an asset can outlive its toolkit, folder or
    owner. Joins surface that state with this error instead of returning a
    half-built view.
    """

    def __init__(self, asset_id: int, field: str, missing_id: int):
        super().__init__(
            f"Asset {asset_id} references missing {field}={missing_id}",
            ErrorCode.ORPHANED_REFERENCE,
            status_code=500,
            details={"asset_id": asset_id, "field": field, "missing_id": missing_id}
        )


class StorageError(GarageException):
    """Storage backend or filesystem operation failed."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        details = {}
        if original_error:
            details["original_error"] = str(original_error)

        super().__init__(
            message,
            ErrorCode.STORAGE_ERROR,
            status_code=500,
            details=details
        )
