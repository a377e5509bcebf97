"""
ObjectStore facade.

Composes key building, bucket and media type resolution and the transfer
executor into the public upload/download operations.

Two failure channels exist and callers must handle both:
- raised exceptions: MissingBucketError, MissingKeyError,
  DownloadUnavailableError and any transport error from the client;
- UploadErr results: the store accepted the put but returned no ETag.
"""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Union
from urllib.parse import unquote, urlsplit

from .base import ObjectStoreInterface
from .client import S3StoreClient, StoreClient
from .config import StoreConfig
from .exceptions import MissingKeyError, ObjectStoreError
from .keys import build_json_key, build_upload_key
from .models import (
    DownloadRequest,
    UploadJSONRequest,
    UploadRequest,
    UploadResult,
)
from .resolution import resolve_bucket, resolve_media_type
from .transfer import TransferExecutor

log = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"


class ObjectStore(ObjectStoreInterface):
    """Upload and download against one S3-compatible endpoint.

    The config is immutable, so one instance may serve concurrent calls.
    """

    def __init__(self, config: StoreConfig, client: Optional[StoreClient] = None):
        self._config = config
        self._client = client or S3StoreClient.from_config(config)
        self._executor = TransferExecutor(self._client, config.endpoint)

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def key_prefix(self) -> str:
        return self._config.key_prefix

    @property
    def bucket(self) -> Optional[str]:
        return self._config.bucket

    @property
    def endpoint(self) -> str:
        return self._config.endpoint

    async def upload(
        self,
        local_file: Union[str, os.PathLike],
        *,
        key: Optional[str] = None,
        bucket: Optional[str] = None,
        media_type: Optional[str] = None,
    ) -> UploadResult:
        """Upload a local file and return its location.

        Without ``key`` the object is stored at ``<prefix>/<random id>/<file name>``.

        Raises:
            MissingBucketError: If no bucket is configured or given.
            InvalidKeyError: If ``key`` contains a ``..`` segment or is empty after
                normalization.
        """
        request = UploadRequest(local_file=local_file, key=key, bucket=bucket, media_type=media_type)
        resolved_bucket = resolve_bucket(request.bucket, self._config.bucket)

        path = Path(request.local_file)
        object_key = build_upload_key(self._config.key_prefix, request.key, path.name)
        content_type = resolve_media_type(request.media_type, str(path))
        log.debug(
            "[ObjectStore:Upload] %s -> %s/%s (%s)",
            path,
            resolved_bucket,
            object_key,
            content_type or "no content type",
        )

        data = await asyncio.to_thread(path.read_bytes)
        return await self._executor.put_object(resolved_bucket, object_key, data, content_type)

    async def upload_json(
        self,
        file_name: str,
        data: Union[dict[str, Any], list[Any]],
        *,
        key: Optional[str] = None,
        bucket: Optional[str] = None,
    ) -> UploadResult:
        """Upload ``data`` as JSON at ``<prefix>/<key or file_name>.json``.

        Raises:
            MissingBucketError: If no bucket is configured or given.
            InvalidKeyError: If the key or file name contains a ``..`` segment
                or is empty after normalization.
            TypeError: If ``data`` is not JSON serializable.
        """
        request = UploadJSONRequest(file_name=file_name, data=data, key=key, bucket=bucket)
        resolved_bucket = resolve_bucket(request.bucket, self._config.bucket)

        object_key = build_json_key(self._config.key_prefix, request.key or request.file_name)
        body = json.dumps(request.data, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        log.debug("[ObjectStore:UploadJSON] -> %s/%s", resolved_bucket, object_key)

        return await self._executor.put_object(resolved_bucket, object_key, body, JSON_MEDIA_TYPE)

    async def download(self, key: str, *, bucket: Optional[str] = None) -> str:
        """Download ``key`` to a temp file and return its path.

        The key is used as given; the key prefix is not applied, so keys
        produced by an upload round-trip unchanged.

        Raises:
            MissingBucketError: If no bucket is configured or given.
            MissingKeyError: If ``key`` is empty.
            DownloadUnavailableError: If the response has no readable body.
        """
        request = DownloadRequest(key=key, bucket=bucket)
        resolved_bucket = resolve_bucket(request.bucket, self._config.bucket)
        if not request.key:
            raise MissingKeyError("key value must be provided")

        log.debug("[ObjectStore:Download] %s/%s", resolved_bucket, request.key)
        return await self._executor.get_object(resolved_bucket, request.key)

    async def download_from_url(self, location: str) -> str:
        """Download the object behind a location URL returned by an upload.

        Raises:
            ObjectStoreError: If the URL is not under the configured endpoint.
            MissingKeyError: If the URL does not name both a bucket and a key.
        """
        base = urlsplit(self._config.endpoint)
        # Relative resolution against the endpoint keeps its path up to the last "/".
        base_dir = base.path[: base.path.rfind("/") + 1] or "/"
        parsed = urlsplit(location)
        if (parsed.scheme, parsed.netloc) != (base.scheme, base.netloc) or not parsed.path.startswith(base_dir):
            raise ObjectStoreError(f"Location {location} is not under endpoint {self._config.endpoint}")

        bucket, _, key = unquote(parsed.path[len(base_dir) :]).partition("/")
        if not bucket or not key:
            raise MissingKeyError(f"Location {location} does not name a bucket and key")
        return await self.download(key, bucket=bucket)
