"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError          (domain.py)
    │   ├── ValidationError
    │   └── NotFoundError
    ├── ApplicationError     (application.py)
    │   └── ConfigError      (searchsync.config.validation)
    └── InfrastructureError  (infrastructure.py)
        ├── SerializationError
        └── BulkWriteError

Failures raised by the search client itself are never wrapped; they reach
the caller as the client raised them.
"""

from searchsync.kernel.errors.application import ApplicationError
from searchsync.kernel.errors.base import BaseError
from searchsync.kernel.errors.domain import DomainError, NotFoundError, ValidationError
from searchsync.kernel.errors.infrastructure import (
    BulkWriteError,
    InfrastructureError,
    SerializationError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "BulkWriteError",
    "DomainError",
    "InfrastructureError",
    "NotFoundError",
    "SerializationError",
    "ValidationError",
]
