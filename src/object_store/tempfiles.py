"""Scoped temporary files that are handed to the caller only on success."""

import logging
import os
import tempfile
from typing import Awaitable, BinaryIO, Callable

log = logging.getLogger(__name__)


async def with_temporary_file(
    suffix: str,
    fn: Callable[[BinaryIO], Awaitable[None]],
) -> str:
    """Create a temp file, let ``fn`` fill it, and return its path.

    If ``fn`` raises (or the task is cancelled) the file is closed and
    deleted before the exception propagates, so a returned path always
    names a completely written file. The caller owns the file afterwards.
    """
    fd, tmp_path = tempfile.mkstemp(suffix=suffix)
    try:
        with os.fdopen(fd, "wb") as f:
            await fn(f)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            log.warning("Could not remove partial temp file %s", tmp_path)
        raise
    return tmp_path
