"""Type-safe exception hierarchy and error codes.

Provides structured error handling with:
- Domain-specific exception taxonomy
- HTTP status code mapping
- Structured error details
- FastAPI integration via exception handlers
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Type-safe error codes for API responses."""

    # Validation errors (400)
    INVALID_INPUT = "invalid_input"
    INVALID_IMPORT_FILE = "invalid_import_file"

    # Resource errors (404)
    LANGUAGE_NOT_FOUND = "language_not_found"

    # Conflict (409)
    IMPORT_IN_PROGRESS = "import_in_progress"

    # Service errors (500)
    CORRUPT_RECORD = "corrupt_record"
    CHAIN_DISCOVERY_FAILED = "chain_discovery_failed"
    EXTERNAL_SERVICE_ERROR = "external_service_error"

    # Unavailable (503)
    STORE_UNAVAILABLE = "store_unavailable"


class ErrorDetail(BaseModel):
    """Structured error information for API responses."""

    code: ErrorCode
    message: str
    field: Optional[str] = None
    context: dict = Field(default_factory=dict)


class CognetError(Exception):
    """Base exception for all application errors.

    Provides structured error information and HTTP status mapping.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        field: Optional[str] = None,
        status_code: int = 500,
        **context
    ):
        self.code = code
        self.message = message
        self.field = field
        self.status_code = status_code
        self.context = context
        super().__init__(message)

    def to_detail(self) -> ErrorDetail:
        """Convert to API error detail."""
        return ErrorDetail(
            code=self.code,
            message=self.message,
            field=self.field,
            context=self.context
        )


# ═════════════════════════════════════════════════════════════════════════════
# Validation Errors (400)
# ═════════════════════════════════════════════════════════════════════════════

class ValidationError(CognetError):
    """Invalid input data."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INVALID_INPUT,
        field: Optional[str] = None,
        **context
    ):
        super().__init__(
            code=code,
            message=message,
            field=field,
            status_code=400,
            **context
        )


class ImportFormatError(ValidationError):
    """Uploaded import file cannot be parsed."""

    def __init__(self, source: str, reason: str, line_number: Optional[int] = None):
        message = f"Invalid {source} import: {reason}"
        if line_number is not None:
            message += f" (line {line_number})"
        super().__init__(
            message=message,
            code=ErrorCode.INVALID_IMPORT_FILE,
            field="file",
            source=source,
            reason=reason,
            line_number=line_number
        )


# ═════════════════════════════════════════════════════════════════════════════
# Resource Errors (404)
# ═════════════════════════════════════════════════════════════════════════════

class ResourceNotFoundError(CognetError):
    """Requested resource does not exist."""

    def __init__(
        self,
        resource_type: str,
        identifier: str,
        code: ErrorCode = ErrorCode.LANGUAGE_NOT_FOUND
    ):
        super().__init__(
            code=code,
            message=f"{resource_type} not found: {identifier}",
            status_code=404,
            resource_type=resource_type,
            identifier=identifier
        )


class LanguageNotFoundError(ResourceNotFoundError):
    """No language record is stored for the code."""

    def __init__(self, language: str):
        super().__init__(
            resource_type="Language",
            identifier=language,
            code=ErrorCode.LANGUAGE_NOT_FOUND
        )
        self.language = language


# ═════════════════════════════════════════════════════════════════════════════
# Conflict (409)
# ═════════════════════════════════════════════════════════════════════════════

class ImportInProgressError(CognetError):
    """An import is already running on this importer."""

    def __init__(self):
        super().__init__(
            code=ErrorCode.IMPORT_IN_PROGRESS,
            message="An import is already in progress",
            status_code=409
        )


# ═════════════════════════════════════════════════════════════════════════════
# Service Errors (500/503)
# ═════════════════════════════════════════════════════════════════════════════

class ServiceError(CognetError):
    """Internal service or infrastructure failure."""

    def __init__(
        self,
        service: str,
        reason: str,
        code: ErrorCode = ErrorCode.EXTERNAL_SERVICE_ERROR,
        status_code: int = 500,
        **context
    ):
        super().__init__(
            code=code,
            message=f"Service error in {service}: {reason}",
            status_code=status_code,
            service=service,
            reason=reason,
            **context
        )


class CorruptRecordError(ServiceError):
    """A stored record could not be decoded."""

    def __init__(self, key: str, reason: str):
        super().__init__(
            service="store",
            reason=f"corrupt record at {key}: {reason}",
            code=ErrorCode.CORRUPT_RECORD,
            key=key
        )


class StoreUnavailableError(ServiceError):
    """Backing store could not be reached or rejected the command."""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            service="store",
            reason=f"{operation}: {reason}",
            code=ErrorCode.STORE_UNAVAILABLE,
            status_code=503,
            operation=operation
        )


class ChainDiscoveryError(ServiceError):
    """Cognate chains could not be built for a concept."""

    def __init__(self, concept_id: str, reason: str):
        super().__init__(
            service="chain_discovery",
            reason=f"chain discovery failed for concept {concept_id}: {reason}",
            code=ErrorCode.CHAIN_DISCOVERY_FAILED,
            concept_id=concept_id
        )
        self.concept_id = concept_id
