"""Abstract interface shared by the S3-backed facade and the stub."""

import os
from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from .models import UploadResult


class ObjectStoreInterface(ABC):
    """Upload files and JSON payloads, download objects to local files."""

    @abstractmethod
    async def upload(
        self,
        local_file: Union[str, os.PathLike],
        *,
        key: Optional[str] = None,
        bucket: Optional[str] = None,
        media_type: Optional[str] = None,
    ) -> UploadResult:
        """Upload a local file. A key is generated when none is given."""

    @abstractmethod
    async def upload_json(
        self,
        file_name: str,
        data: Union[dict[str, Any], list[Any]],
        *,
        key: Optional[str] = None,
        bucket: Optional[str] = None,
    ) -> UploadResult:
        """Serialize ``data`` and upload it as ``application/json``."""

    @abstractmethod
    async def download(self, key: str, *, bucket: Optional[str] = None) -> str:
        """Download an object and return the local temp file path."""

    @abstractmethod
    async def download_from_url(self, location: str) -> str:
        """Download an object addressed by a location URL returned from an upload."""
