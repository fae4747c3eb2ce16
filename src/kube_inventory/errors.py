"""Error taxonomy for cluster introspection."""

from __future__ import annotations


class InventoryError(Exception):
    """Base class for all inventory errors."""


class AuthError(InventoryError):
    """A connection to the cluster could not be established."""


class QueryError(InventoryError):
    """A read call against the cluster API failed."""


class NotFoundError(InventoryError):
    """The queried resource collection was unexpectedly empty."""


class MalformedImageError(InventoryError):
    """A container image reference has no tag separator."""

    def __init__(self, image: str) -> None:
        super().__init__(f"image '{image}' does not have a discernible version tag")
        self.image = image
