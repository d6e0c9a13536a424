from __future__ import annotations

from enum import Enum

from fastapi import status


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    CONFLICT = "conflict"
    INFRASTRUCTURE = "infrastructure"


class CatalogError(Exception):
    """Base class for errors surfaced by the catalog services.

    ``kind`` lets API clients decide whether to fix their input
    (validation / conflict) or retry later (infrastructure).
    """

    kind: ErrorKind = ErrorKind.INFRASTRUCTURE
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    kind = ErrorKind.VALIDATION
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(CatalogError):
    kind = ErrorKind.CONFLICT
    status_code = status.HTTP_400_BAD_REQUEST


class InfrastructureError(CatalogError):
    kind = ErrorKind.INFRASTRUCTURE
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
