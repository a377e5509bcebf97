"""Upload and download files and JSON payloads against an S3-compatible store."""

from .base import ObjectStoreInterface
from .client import GetObjectResponse, PutObjectResponse, S3StoreClient, StoreClient
from .config import StoreConfig, StoreCredentials
from .exceptions import (
    DownloadUnavailableError,
    IntegrityTagMissingError,
    InvalidKeyError,
    MissingBucketError,
    MissingKeyError,
    ObjectStoreError,
)
from .factory import create_object_store
from .keys import build_json_key, build_upload_key, join_key
from .models import (
    DownloadRequest,
    UploadErr,
    UploadJSONRequest,
    UploadOk,
    UploadRequest,
    UploadResult,
)
from .resolution import resolve_bucket, resolve_media_type
from .store import ObjectStore
from .stub import StubObjectStore
from .tempfiles import with_temporary_file
from .transfer import TransferExecutor

__all__ = [
    "ObjectStore",
    "ObjectStoreInterface",
    "StubObjectStore",
    "create_object_store",
    "StoreConfig",
    "StoreCredentials",
    "StoreClient",
    "S3StoreClient",
    "PutObjectResponse",
    "GetObjectResponse",
    "TransferExecutor",
    "UploadRequest",
    "UploadJSONRequest",
    "DownloadRequest",
    "UploadOk",
    "UploadErr",
    "UploadResult",
    "ObjectStoreError",
    "MissingBucketError",
    "MissingKeyError",
    "IntegrityTagMissingError",
    "InvalidKeyError",
    "DownloadUnavailableError",
    "build_upload_key",
    "build_json_key",
    "join_key",
    "resolve_bucket",
    "resolve_media_type",
    "with_temporary_file",
]
