"""Object key construction.

Every key produced here is ``join(prefix, suffix)``: the prefix is applied
exactly once and keys never start with a separator.
"""

import uuid

from .exceptions import InvalidKeyError

JSON_SUFFIX = ".json"
PARENT_SEGMENT = ".."


def join_key(*segments: str) -> str:
    """Join key segments with ``/``, normalizing separators.

    Backslashes become slashes; empty and ``.`` segments are dropped, so
    duplicate, leading and trailing separators disappear.

    Raises:
        InvalidKeyError: If any segment is ``..``.
    """
    parts = []
    for segment in segments:
        for part in segment.replace("\\", "/").split("/"):
            if part == PARENT_SEGMENT:
                raw = "/".join(segments)
                raise InvalidKeyError(f"Key may not contain '..' segments: {raw}", key=raw)
            if part and part != ".":
                parts.append(part)
    return "/".join(parts)


def build_upload_key(
    prefix: str,
    explicit_key: str | None = None,
    local_file_name: str | None = None,
) -> str:
    """Key for a file upload.

    With an explicit key the result is ``prefix/explicit_key``; otherwise a
    random 128-bit id is inserted before the local file name.
    """
    if explicit_key:
        _require_name(explicit_key)
        return join_key(prefix, explicit_key)
    return join_key(prefix, uuid.uuid4().hex, local_file_name or "")


def build_json_key(prefix: str, file_name: str) -> str:
    """Key for a JSON upload. Never randomized; ``.json`` is appended once."""
    _require_name(file_name)
    key = join_key(prefix, file_name)
    if not key.endswith(JSON_SUFFIX):
        key += JSON_SUFFIX
    return key


def _require_name(name: str) -> None:
    if not join_key(name):
        raise InvalidKeyError(f"Key name {name!r} is empty after normalization", key=name)
