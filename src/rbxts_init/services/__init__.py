from .base import BaseService
from .errors import (
    DependencyMissingError,
    DestinationConflictError,
    ExternalCommandFailedError,
    IoFailedError,
    ServiceFailure,
    ValidationFailedError,
)

__all__ = [
    "BaseService",
    "DependencyMissingError",
    "DestinationConflictError",
    "ExternalCommandFailedError",
    "IoFailedError",
    "ServiceFailure",
    "ValidationFailedError",
]
