"""Store client collaborator: the put/get surface the facade talks to."""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

import boto3
from botocore.config import Config

from .config import StoreConfig

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PutObjectResponse:
    """What the transfer layer needs from a put: the integrity tag, if any."""

    etag: Optional[str] = None


@dataclass(frozen=True)
class GetObjectResponse:
    """Get result. ``body`` is a file-like stream or None."""

    body: Any = None


class StoreClient(ABC):
    """Backend-agnostic put/get interface.

    Implementations may raise transport errors from either call; callers
    let them propagate.
    """

    @abstractmethod
    async def put_object(
        self,
        bucket: str,
        key: str,
        body: bytes,
        content_type: Optional[str] = None,
    ) -> PutObjectResponse:
        """Store ``body`` under ``bucket``/``key``."""

    @abstractmethod
    async def get_object(self, bucket: str, key: str) -> GetObjectResponse:
        """Fetch the object at ``bucket``/``key``."""


class S3StoreClient(StoreClient):
    """S3-compatible client (AWS S3, Cloudflare R2, MinIO, SeaweedFS)."""

    def __init__(
        self,
        endpoint_url: str | None = None,
        region: str = "us-east-1",
        aws_access_key_id: str | None = None,
        aws_secret_access_key: str | None = None,
        aws_session_token: str | None = None,
    ):
        kwargs: dict = {
            "config": Config(
                region_name=region,
                signature_version="s3v4",
                retries={"max_attempts": 3, "mode": "standard"},
            ),
        }
        if aws_access_key_id and aws_secret_access_key:
            kwargs["aws_access_key_id"] = aws_access_key_id
            kwargs["aws_secret_access_key"] = aws_secret_access_key
        if aws_session_token:
            kwargs["aws_session_token"] = aws_session_token
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url

        self._client = boto3.client("s3", **kwargs)

    @classmethod
    def from_config(cls, config: StoreConfig) -> "S3StoreClient":
        return cls(
            endpoint_url=config.endpoint,
            region=config.region,
            aws_access_key_id=config.credentials.access_key_id,
            aws_secret_access_key=config.credentials.secret_access_key,
            aws_session_token=config.credentials.session_token,
        )

    async def put_object(
        self,
        bucket: str,
        key: str,
        body: bytes,
        content_type: Optional[str] = None,
    ) -> PutObjectResponse:
        params: dict = {"Bucket": bucket, "Key": key, "Body": body}
        if content_type:
            params["ContentType"] = content_type

        response = await asyncio.to_thread(self._client.put_object, **params)
        return PutObjectResponse(etag=response.get("ETag"))

    async def get_object(self, bucket: str, key: str) -> GetObjectResponse:
        response = await asyncio.to_thread(self._client.get_object, Bucket=bucket, Key=key)
        return GetObjectResponse(body=response.get("Body"))
