"""Per-call request records and upload results."""

import os
from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Union

from .exceptions import ObjectStoreError


@dataclass(frozen=True)
class UploadRequest:
    """Upload of a local file. ``bucket`` and ``key`` override the defaults."""

    local_file: Union[str, os.PathLike]
    key: Optional[str] = None
    bucket: Optional[str] = None
    media_type: Optional[str] = None


@dataclass(frozen=True)
class UploadJSONRequest:
    """Upload of an in-memory JSON value under a caller-chosen file name."""

    file_name: str
    data: Union[dict[str, Any], list[Any]]
    key: Optional[str] = None
    bucket: Optional[str] = None


@dataclass(frozen=True)
class DownloadRequest:
    key: str
    bucket: Optional[str] = None


@dataclass(frozen=True)
class UploadOk:
    """Successful upload; ``location`` is the fully qualified object URL."""

    location: str
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class UploadErr:
    """Upload reached the store but could not be confirmed."""

    error: ObjectStoreError
    ok: ClassVar[bool] = False


UploadResult = Union[UploadOk, UploadErr]
