"""Exception hierarchy for object store transfers."""


class ObjectStoreError(Exception):
    """Base exception for all object store operations."""

    def __init__(self, message: str, key: str | None = None, cause: Exception | None = None):
        self.key = key
        self.cause = cause
        super().__init__(message)


class MissingBucketError(ObjectStoreError):
    """Raised when no bucket is given on the request or the store config."""


class MissingKeyError(ObjectStoreError):
    """Raised when a download is requested without a key."""


class IntegrityTagMissingError(ObjectStoreError):
    """Put returned without an ETag. Reported through UploadErr, never raised."""


class DownloadUnavailableError(ObjectStoreError):
    """Raised when a get response carries no readable body."""


class InvalidKeyError(ObjectStoreError):
    """Raised when a key contains a ``..`` segment."""
