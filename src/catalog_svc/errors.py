"""Errors raised by the catalog service and its stores."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog service errors."""
    pass


class ForbiddenError(CatalogError):
    """Raised when the caller is not allowed to see the requested resource."""

    def __init__(self, message: str = "You don't have access to this resource"):
        super().__init__(message)


class NotFoundError(CatalogError):
    """Raised when a project or table does not exist upstream."""
    pass
