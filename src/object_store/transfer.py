"""Transfer executor: put/get against a StoreClient and result translation."""

import asyncio
import logging
import posixpath
import threading
from typing import BinaryIO, Optional
from urllib.parse import quote, urljoin

from .client import StoreClient
from .exceptions import DownloadUnavailableError, IntegrityTagMissingError
from .keys import join_key
from .models import UploadErr, UploadOk, UploadResult
from .tempfiles import with_temporary_file

log = logging.getLogger(__name__)

COPY_CHUNK_SIZE = 1024 * 1024


def object_location(endpoint: str, bucket: str, key: str) -> str:
    """Fully qualified URL of ``bucket``/``key`` relative to ``endpoint``."""
    return urljoin(endpoint, quote(join_key(bucket, key), safe="/"))


class TransferExecutor:
    """Runs a single put or get and maps the response onto the result model.

    Transport errors raised by the client are not caught here.
    """

    def __init__(self, client: StoreClient, endpoint: str):
        self._client = client
        self._endpoint = endpoint

    async def put_object(
        self,
        bucket: str,
        key: str,
        data: bytes,
        content_type: Optional[str] = None,
    ) -> UploadResult:
        log_prefix = f"[TransferExecutor:Put:{bucket}/{key}] "

        response = await self._client.put_object(bucket, key, data, content_type)

        if not response.etag:
            log.warning("%sResponse carried no ETag", log_prefix)
            return UploadErr(
                IntegrityTagMissingError("Unable to retrieve ETag from upload response", key=key)
            )

        location = object_location(self._endpoint, bucket, key)
        log.info("%sUploaded %d bytes (etag=%s)", log_prefix, len(data), response.etag)
        return UploadOk(location)

    async def get_object(self, bucket: str, key: str) -> str:
        """Download ``bucket``/``key`` into a temp file and return its path.

        Raises:
            DownloadUnavailableError: If the response body is missing or not
                readable.
        """
        log_prefix = f"[TransferExecutor:Get:{bucket}/{key}] "

        response = await self._client.get_object(bucket, key)
        body = response.body
        if body is None or not callable(getattr(body, "read", None)):
            raise DownloadUnavailableError(
                f"Could not download data from object store for key {key}", key=key
            )

        stop = threading.Event()

        def _drain(f: BinaryIO) -> None:
            # Body reads, writes and close all happen on this worker thread.
            try:
                while not stop.is_set():
                    chunk = body.read(COPY_CHUNK_SIZE)
                    if not chunk:
                        break
                    f.write(chunk)
            finally:
                close = getattr(body, "close", None)
                if callable(close):
                    close()

        async def _copy(f: BinaryIO) -> None:
            worker = asyncio.ensure_future(asyncio.to_thread(_drain, f))
            try:
                await asyncio.shield(worker)
            except asyncio.CancelledError:
                stop.set()
                # The file is closed after return; wait until the worker lets go of it.
                await asyncio.wait([worker])
                if worker.exception() is not None:
                    log.debug("%sStream failed after cancellation: %s", log_prefix, worker.exception())
                raise

        output_path = await with_temporary_file(f"-{posixpath.basename(key)}", _copy)
        log.info("%sDownloaded to %s", log_prefix, output_path)
        return output_path
