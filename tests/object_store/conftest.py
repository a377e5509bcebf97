import hashlib
import io
import tempfile
from typing import Optional

import pytest
from botocore.exceptions import ClientError

from object_store.client import GetObjectResponse, PutObjectResponse, StoreClient
from object_store.config import StoreConfig, StoreCredentials

ENDPOINT = "http://localhost:9000"
BUCKET = "test-bucket"


class InMemoryStoreClient(StoreClient):
    """Emulates S3 put/get semantics: quoted MD5 ETags and streaming bodies."""

    def __init__(self, omit_etag: bool = False):
        self.omit_etag = omit_etag
        self.objects: dict[tuple[str, str], tuple[bytes, Optional[str]]] = {}
        self.put_calls: list[tuple[str, str, Optional[str]]] = []
        self.get_calls: list[tuple[str, str]] = []

    async def put_object(self, bucket, key, body, content_type=None):
        self.put_calls.append((bucket, key, content_type))
        self.objects[(bucket, key)] = (body, content_type)
        if self.omit_etag:
            return PutObjectResponse()
        return PutObjectResponse(etag=f'"{hashlib.md5(body).hexdigest()}"')

    async def get_object(self, bucket, key):
        self.get_calls.append((bucket, key))
        if (bucket, key) not in self.objects:
            raise ClientError({"Error": {"Code": "NoSuchKey", "Message": "missing"}}, "GetObject")
        data, _ = self.objects[(bucket, key)]
        return GetObjectResponse(body=io.BytesIO(data))


def _make_config(**overrides) -> StoreConfig:
    values = {
        "endpoint": ENDPOINT,
        "region": "auto",
        "credentials": StoreCredentials(access_key_id="key", secret_access_key="secret"),
        "bucket": BUCKET,
    }
    values.update(overrides)
    return StoreConfig(**values)


@pytest.fixture(autouse=True)
def isolated_tempdir(tmp_path, monkeypatch):
    """Route temp files created during a test into its own directory."""
    temp_dir = tmp_path / "temp"
    temp_dir.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(temp_dir))
    return temp_dir


@pytest.fixture
def memory_client() -> InMemoryStoreClient:
    return InMemoryStoreClient()


@pytest.fixture
def hello_file(tmp_path):
    path = tmp_path / "hello.txt"
    path.write_text("Hello world")
    return path


@pytest.fixture
def make_config():
    return _make_config


@pytest.fixture
def etagless_client() -> InMemoryStoreClient:
    return InMemoryStoreClient(omit_etag=True)
