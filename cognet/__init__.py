"""Cognet - Cognate chain discovery across languages.

Main orchestration layer coordinating services, storage, and API.
"""

__version__ = "0.1.0"

# Observability exports for convenience
from cognet.observ import get_logger, timer
from cognet.errors import (
    CognetError,
    ErrorCode,
    ValidationError,
    ImportFormatError,
    ResourceNotFoundError,
    LanguageNotFoundError,
    ImportInProgressError,
    ServiceError,
    CorruptRecordError,
    StoreUnavailableError,
    ChainDiscoveryError,
)

__all__ = [
    # Version
    "__version__",
    # Logging
    "get_logger",
    "timer",
    # Errors
    "CognetError",
    "ErrorCode",
    "ValidationError",
    "ImportFormatError",
    "ResourceNotFoundError",
    "LanguageNotFoundError",
    "ImportInProgressError",
    "ServiceError",
    "CorruptRecordError",
    "StoreUnavailableError",
    "ChainDiscoveryError",
]
