"""Error kinds raised by the catalog and cart stores."""


class StorefrontError(Exception):
    """Base class for store outcomes that terminate a request."""


class InvalidInputError(StorefrontError):
    """A required field is missing or malformed."""


class NotFoundError(StorefrontError):
    """The referenced product or cart item does not exist."""


class StorageFailureError(StorefrontError):
    """The persisted document could not be read or written."""
