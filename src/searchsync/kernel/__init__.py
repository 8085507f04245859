"""Kernel – framework-agnostic building blocks."""

from searchsync.kernel.errors import (
    ApplicationError,
    BaseError,
    BulkWriteError,
    DomainError,
    InfrastructureError,
    NotFoundError,
    SerializationError,
    ValidationError,
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
