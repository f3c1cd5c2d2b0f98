"""
Error taxonomy of the inventory service.

ValidationError and NotFoundError are expected outcomes (400 / 404).
StorageError and PersistenceError are infrastructure failures (500).
"""


class InventoryError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(InventoryError):
    """A required field is missing or empty."""


class NotFoundError(InventoryError):
    """
    An item or its photo could not be found.

    `reason` tells apart the causes that share the same 404 response:
    - "item": no row with that id
    - "no photo": the item has no photo reference
    - "file missing": the referenced file is gone from the cache directory
    """

    ITEM = "item"
    NO_PHOTO = "no photo"
    FILE_MISSING = "file missing"

    def __init__(self, message: str, reason: str = ITEM):
        super().__init__(message)
        self.reason = reason


class StorageError(InventoryError):
    """The cache directory could not be written or read."""


class PersistenceError(InventoryError):
    """A database statement failed."""
