"""Error taxonomy for the product catalog.

Each error carries the HTTP status it is rendered with and a human readable
message. A zero-match update is not an error; see ``UpdateOutcome``.
"""


class CatalogError(Exception):
    """Base class for failures surfaced to API callers."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UploadError(CatalogError):
    """The image file could not be read or the remote upload was rejected."""


class SerializationError(CatalogError):
    """A document could not be converted to its storage representation."""


class StorageError(CatalogError):
    """The database rejected or failed an insert, update or read."""


class InvalidIdentifier(CatalogError):
    """A caller supplied identifier is not a well-formed ObjectId."""

    status_code = 400

    def __init__(self, value: str, message: str = "Invalid product ID"):
        super().__init__(message)
        self.value = value
