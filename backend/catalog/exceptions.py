"""Custom exception hierarchy for the studio catalog."""

from enum import Enum
from typing import Optional, Dict, Any, List


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    # Catalog lookups
    FOLDER_NOT_FOUND = "FOLDER_NOT_FOUND"
    PACKAGE_NOT_FOUND = "PACKAGE_NOT_FOUND"
    FAQ_CATEGORY_NOT_FOUND = "FAQ_CATEGORY_NOT_FOUND"
    FAQ_NOT_FOUND = "FAQ_NOT_FOUND"
    TESTIMONIAL_NOT_FOUND = "TESTIMONIAL_NOT_FOUND"
    SYNC_RUN_NOT_FOUND = "SYNC_RUN_NOT_FOUND"

    # Sync errors
    CONFIGURATION_MISSING = "CONFIGURATION_MISSING"
    EXTERNAL_UNAVAILABLE = "EXTERNAL_UNAVAILABLE"
    MALFORMED_DOCUMENT = "MALFORMED_DOCUMENT"
    VALIDATION_FAILURE = "VALIDATION_FAILURE"
    CONSTRAINT_CONFLICT = "CONSTRAINT_CONFLICT"
    SYNC_FAILED = "SYNC_FAILED"

    # Generic errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class CatalogException(Exception):
    """
    Base exception for all catalog errors.

    Provides structured error responses with:
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
        """
        Convert exception to dictionary for JSON response.

        Returns:
            Dictionary with error, message, and details fields
        """
        return {
            "error": self.error_code.value,
            "message": self.message,
            "details": self.details
        }


class NotFoundError(CatalogException):
    """A catalog row looked up by id does not exist."""

    entity = "Row"
    code = ErrorCode.INTERNAL_ERROR

    def __init__(self, entity_id: str):
        super().__init__(
            f"{self.entity} not found: {entity_id}",
            self.code,
            status_code=404,
            details={"id": entity_id}
        )


class FolderNotFoundError(NotFoundError):
    entity = "Folder"
    code = ErrorCode.FOLDER_NOT_FOUND


class PackageNotFoundError(NotFoundError):
    entity = "Package"
    code = ErrorCode.PACKAGE_NOT_FOUND


class FaqCategoryNotFoundError(NotFoundError):
    entity = "FAQ category"
    code = ErrorCode.FAQ_CATEGORY_NOT_FOUND


class FaqNotFoundError(NotFoundError):
    entity = "FAQ"
    code = ErrorCode.FAQ_NOT_FOUND


class TestimonialNotFoundError(NotFoundError):
    entity = "Testimonial"
    code = ErrorCode.TESTIMONIAL_NOT_FOUND


class SyncRunNotFoundError(NotFoundError):
    entity = "Sync run"
    code = ErrorCode.SYNC_RUN_NOT_FOUND


class ConfigurationMissingError(CatalogException):
    """A setting required by a sync stage is unset."""

    def __init__(self, setting: str, message: Optional[str] = None):
        super().__init__(
            message or f"Required setting is not configured: {setting}",
            ErrorCode.CONFIGURATION_MISSING,
            status_code=500,
            details={"setting": setting}
        )


class ExternalUnavailableError(CatalogException):
    """Cloudinary or the document store could not be reached or refused the call."""

    def __init__(self, service: str, message: str, original_error: Optional[Exception] = None):
        details: Dict[str, Any] = {"service": service}
        if original_error:
            details["original_error"] = str(original_error)
        super().__init__(
            message,
            ErrorCode.EXTERNAL_UNAVAILABLE,
            status_code=502,
            details=details
        )


class MalformedDocumentError(CatalogException):
    """A downloaded JSON document failed to parse or has the wrong top-level shape."""

    def __init__(self, document: str, message: str):
        super().__init__(
            f"{document}: {message}",
            ErrorCode.MALFORMED_DOCUMENT,
            status_code=422,
            details={"document": document}
        )


class ValidationFailureError(CatalogException):
    """A record inside a document is missing required fields or holds the wrong type."""

    def __init__(self, document: str, index: int, missing: List[str], invalid: Optional[List[str]] = None):
        invalid = invalid or []
        problems = []
        if missing:
            problems.append(f"missing required fields: {', '.join(missing)}")
        if invalid:
            problems.append(f"fields must be text, number or boolean: {', '.join(invalid)}")
        super().__init__(
            f"{document}: record {index} is invalid ({'; '.join(problems)})",
            ErrorCode.VALIDATION_FAILURE,
            status_code=422,
            details={
                "document": document,
                "index": index,
                "missing_fields": missing,
                "invalid_fields": invalid,
            }
        )


class ConstraintConflictError(CatalogException):
    """A unique constraint rejected a write that is not treated as idempotent."""

    def __init__(self, table: str, key: str, original_error: Optional[Exception] = None):
        details: Dict[str, Any] = {"table": table, "key": key}
        if original_error:
            details["original_error"] = str(original_error)
        super().__init__(
            f"Unique constraint conflict on {table}: {key}",
            ErrorCode.CONSTRAINT_CONFLICT,
            status_code=409,
            details=details
        )


class SyncFailedError(CatalogException):
    """A sync run stopped (or finished) with at least one failing stage."""

    def __init__(self, stage: str, cause: Exception, failures: Optional[List[Dict[str, Any]]] = None):
        details: Dict[str, Any] = {"stage": stage, "cause": str(cause)}
        if isinstance(cause, CatalogException):
            details["cause_code"] = cause.error_code.value
        if failures:
            details["failures"] = failures
        super().__init__(
            f"Sync failed at stage '{stage}': {cause}",
            ErrorCode.SYNC_FAILED,
            status_code=500,
            details=details
        )
        self.stage = stage
        self.cause = cause

