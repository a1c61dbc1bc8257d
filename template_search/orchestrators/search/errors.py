"""Catalog error taxonomy.

Cancellation is not an error here: superseded calls surface as
``asyncio.CancelledError`` and are dropped by the coordinator.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base error for catalog calls."""


class NetworkError(CatalogError):
    """Transport failure, non-2xx status or an undecodable body."""


class ServiceError(CatalogError):
    """The catalog answered but reported a failure or sent a malformed payload."""

    DEFAULT_MESSAGE = "Error while fetching templates"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.DEFAULT_MESSAGE)
