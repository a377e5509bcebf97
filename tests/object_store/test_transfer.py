"""Tests for TransferExecutor."""

import asyncio
import io
import os
import threading
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from botocore.exceptions import EndpointConnectionError

from object_store.client import GetObjectResponse, PutObjectResponse, StoreClient
from object_store.exceptions import DownloadUnavailableError, IntegrityTagMissingError
from object_store.models import UploadErr, UploadOk
from object_store.transfer import TransferExecutor, object_location

ENDPOINT = "http://localhost:9000"


class _BrokenBody:
    """Yields one chunk, then fails like a dropped connection."""

    def __init__(self):
        self._reads = 0
        self.closed = False

    def read(self, size=-1):
        self._reads += 1
        if self._reads == 1:
            return b"first chunk"
        raise OSError("connection reset")

    def close(self):
        self.closed = True


class _StallingBody:
    """Blocks in read until released, then returns data forever."""

    def __init__(self):
        self.reading = threading.Event()
        self.release = threading.Event()
        self.closed_on = None

    def read(self, size=-1):
        self.reading.set()
        self.release.wait(5)
        return b"chunk"

    def close(self):
        self.closed_on = threading.current_thread()

@pytest.fixture
def store_client() -> MagicMock:
    return MagicMock(spec=StoreClient, put_object=AsyncMock(), get_object=AsyncMock())


@pytest.fixture
def executor(store_client) -> TransferExecutor:
    return TransferExecutor(store_client, ENDPOINT)


class TestObjectLocation:
    def test_joins_endpoint_bucket_and_key(self):
        assert object_location(ENDPOINT, "b", "p/k.txt") == "http://localhost:9000/b/p/k.txt"

    def test_trailing_slash_endpoint(self):
        assert object_location(ENDPOINT + "/", "b", "k") == "http://localhost:9000/b/k"

    def test_percent_encodes_key(self):
        assert object_location(ENDPOINT, "b", "my file.txt") == "http://localhost:9000/b/my%20file.txt"


class TestPutObject:
    @pytest.mark.asyncio
    async def test_ok_with_location(self, executor, store_client):
        store_client.put_object.return_value = PutObjectResponse(etag='"abc"')

        result = await executor.put_object("b", "p/k.txt", b"data", "text/plain")

        assert result == UploadOk("http://localhost:9000/b/p/k.txt")
        assert result.ok is True
        store_client.put_object.assert_awaited_once_with("b", "p/k.txt", b"data", "text/plain")

    @pytest.mark.asyncio
    async def test_missing_etag_is_soft_failure(self, executor, store_client):
        store_client.put_object.return_value = PutObjectResponse(etag=None)

        result = await executor.put_object("b", "k", b"data")

        assert isinstance(result, UploadErr)
        assert result.ok is False
        assert isinstance(result.error, IntegrityTagMissingError)
        assert result.error.key == "k"

    @pytest.mark.asyncio
    async def test_transport_error_is_raised(self, executor, store_client):
        store_client.put_object.side_effect = EndpointConnectionError(endpoint_url=ENDPOINT)

        with pytest.raises(EndpointConnectionError):
            await executor.put_object("b", "k", b"data")


class TestGetObject:
    @pytest.mark.asyncio
    async def test_streams_body_to_temp_file(self, executor, store_client, isolated_tempdir: Path):
        body = io.BytesIO(b"Hello world")
        store_client.get_object.return_value = GetObjectResponse(body=body)

        path = await executor.get_object("b", "p/report.txt")

        assert path.endswith("-report.txt")
        assert Path(path).parent == isolated_tempdir
        assert Path(path).read_text() == "Hello world"
        assert body.closed

    @pytest.mark.asyncio
    async def test_missing_body_raises(self, executor, store_client):
        store_client.get_object.return_value = GetObjectResponse(body=None)

        with pytest.raises(DownloadUnavailableError) as exc_info:
            await executor.get_object("b", "k")
        assert exc_info.value.key == "k"

    @pytest.mark.asyncio
    async def test_non_stream_body_raises(self, executor, store_client):
        store_client.get_object.return_value = GetObjectResponse(body=b"raw bytes")

        with pytest.raises(DownloadUnavailableError):
            await executor.get_object("b", "k")

    @pytest.mark.asyncio
    async def test_interrupted_stream_leaves_no_file(self, executor, store_client, isolated_tempdir: Path):
        body = _BrokenBody()
        store_client.get_object.return_value = GetObjectResponse(body=body)

        with pytest.raises(OSError, match="connection reset"):
            await executor.get_object("b", "k.txt")

        assert os.listdir(isolated_tempdir) == []
        assert body.closed

    @pytest.mark.asyncio
    async def test_cancel_waits_for_stream_worker(self, executor, store_client, isolated_tempdir: Path):
        body = _StallingBody()
        store_client.get_object.return_value = GetObjectResponse(body=body)

        task = asyncio.create_task(executor.get_object("b", "k.txt"))
        assert await asyncio.to_thread(body.reading.wait, 5)
        task.cancel()
        body.release.set()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert body.closed_on is not None
        assert body.closed_on is not threading.main_thread()
        assert os.listdir(isolated_tempdir) == []
