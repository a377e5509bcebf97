"""In-process stand-in for ObjectStore, for tests of code that uses one."""

import os
from typing import Any, Optional, Union

from .base import ObjectStoreInterface
from .models import UploadOk, UploadResult

STUB_LOCATION = "foo/bar"


class StubObjectStore(ObjectStoreInterface):
    """Returns fixed results and records every call as ``(method, kwargs)``."""

    def __init__(self, location: str = STUB_LOCATION, download_path: str = STUB_LOCATION):
        self.location = location
        self.download_path = download_path
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def upload(
        self,
        local_file: Union[str, os.PathLike],
        *,
        key: Optional[str] = None,
        bucket: Optional[str] = None,
        media_type: Optional[str] = None,
    ) -> UploadResult:
        self.calls.append(
            ("upload", {"local_file": local_file, "key": key, "bucket": bucket, "media_type": media_type})
        )
        return UploadOk(self.location)

    async def upload_json(
        self,
        file_name: str,
        data: Union[dict[str, Any], list[Any]],
        *,
        key: Optional[str] = None,
        bucket: Optional[str] = None,
    ) -> UploadResult:
        self.calls.append(("upload_json", {"file_name": file_name, "data": data, "key": key, "bucket": bucket}))
        return UploadOk(self.location)

    async def download(self, key: str, *, bucket: Optional[str] = None) -> str:
        self.calls.append(("download", {"key": key, "bucket": bucket}))
        return self.download_path

    async def download_from_url(self, location: str) -> str:
        self.calls.append(("download_from_url", {"location": location}))
        return self.download_path
