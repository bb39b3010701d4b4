"""Byte normalization for verification inputs."""

from __future__ import annotations

import re
from typing import Union

from ed25519_webhook.errors import ParseError, UnsupportedTypeError

ByteLike = Union[str, bytes, bytearray, memoryview]

HEX_FORMAT = "hex"
_HEX_PAIRS_RE = re.compile(r"(?:[0-9a-fA-F]{2})*")


def _decode_hex(value: str) -> bytes:
    if not _HEX_PAIRS_RE.fullmatch(value):
        raise ParseError("value is not a valid hex string")
    return bytes(int(value[i : i + 2], 16) for i in range(0, len(value), 2))


def value_to_bytes(value: ByteLike | None, fmt: str | None = None) -> bytes:
    """Convert a str or bytes-like value to ``bytes``.

    Strings are UTF-8 encoded unless ``fmt`` is ``"hex"``, in which case they
    are decoded two digits at a time. ``None`` becomes ``b""``.
    """
    if value is None:
        return b""
    if isinstance(value, str):
        if fmt == HEX_FORMAT:
            return _decode_hex(value)
        return value.encode("utf-8")
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    raise UnsupportedTypeError(
        "unrecognized value type, must be one of: str, bytes, bytearray, memoryview"
    )


def concat_bytes(first: bytes, second: bytes) -> bytes:
    return bytes(first) + bytes(second)
