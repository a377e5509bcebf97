"""Bucket and media type resolution for a single request."""

import logging
import mimetypes
from typing import Optional

from .exceptions import MissingBucketError

log = logging.getLogger(__name__)


def resolve_bucket(request_bucket: Optional[str], default_bucket: Optional[str]) -> str:
    """Return the request bucket, else the default one.

    Raises:
        MissingBucketError: If neither is a non-empty string.
    """
    if request_bucket:
        return request_bucket
    if default_bucket:
        return default_bucket
    raise MissingBucketError(
        "Bucket must be provided in either the ObjectStore config or the request"
    )


def resolve_media_type(explicit: Optional[str], file_path: str) -> Optional[str]:
    """Return the explicit media type, else one guessed from the file extension."""
    if explicit:
        return explicit
    media_type, _ = mimetypes.guess_type(file_path)
    if media_type is None:
        log.debug("No media type inferred for %s", file_path)
    return media_type
