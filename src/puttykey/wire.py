"""
SSH wire-format primitives used by the PuTTY key blobs.

Every field in a blob is a 4-byte big-endian length followed by the body.
Integers are written as unsigned magnitudes, optionally preceded by a zero
byte so that a two's-complement reader sees a non-negative value.
"""

import struct
from typing import Optional, Union

from puttykey.errors import InvalidKeyMaterialError

PREFIX_SIZE = 4

PAD_CONDITIONAL = "conditional"
PAD_FORCED = "forced"
PAD_NONE = "none"
PADDING_MODES = (PAD_CONDITIONAL, PAD_FORCED, PAD_NONE)

ByteLike = Union[bytes, bytearray, memoryview]


def as_magnitude(value: Optional[ByteLike], name: str = "magnitude") -> bytes:
    """Return value as immutable bytes; None becomes b''."""
    if value is None:
        return b""
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise InvalidKeyMaterialError(
            f"{name} must be a byte sequence, got {type(value).__name__}"
        )
    return bytes(value)


def needs_padding(magnitude: bytes) -> bool:
    """True when the most significant bit of the first byte is set."""
    return len(magnitude) > 0 and magnitude[0] >= 0x80


def encode_magnitude(
    magnitude: Optional[ByteLike],
    padding: str = PAD_CONDITIONAL,
    name: str = "magnitude",
) -> bytes:
    """
    Encode a big-endian magnitude as the body of a length-prefixed field.

    Args:
        magnitude: unsigned integer, most significant byte first
        padding: one of PAD_CONDITIONAL, PAD_FORCED, PAD_NONE

    Returns:
        The magnitude, with one leading zero byte when the padding mode
        asks for it. Empty input stays empty in every mode.
    """
    if padding not in PADDING_MODES:
        raise ValueError(f"Unknown padding mode: {padding!r}")
    raw = as_magnitude(magnitude, name)
    if not raw:
        return b""
    if padding == PAD_FORCED or (padding == PAD_CONDITIONAL and needs_padding(raw)):
        return b"\x00" + raw
    return raw


def pack_length(length: int) -> bytes:
    return struct.pack(">I", length)


def put_prefixed(buf: bytearray, body: ByteLike) -> None:
    """Append body to buf preceded by its big-endian length."""
    buf += pack_length(len(body))
    buf += body


def put_string(buf: bytearray, text: Union[str, bytes]) -> None:
    if isinstance(text, str):
        text = text.encode("utf-8")
    put_prefixed(buf, text)


def put_mpint(
    buf: bytearray,
    magnitude: Optional[ByteLike],
    padding: str = PAD_CONDITIONAL,
    name: str = "magnitude",
) -> None:
    put_prefixed(buf, encode_magnitude(magnitude, padding, name))


def iter_fields(blob: bytes):
    """
    Walk a blob of length-prefixed fields.

    Yields (offset, body) pairs. Raises ValueError when a prefix claims
    more bytes than remain.
    """
    offset = 0
    while offset < len(blob):
        if offset + PREFIX_SIZE > len(blob):
            raise ValueError(f"Truncated length prefix at offset {offset}")
        (length,) = struct.unpack(">I", blob[offset:offset + PREFIX_SIZE])
        start = offset + PREFIX_SIZE
        end = start + length
        if end > len(blob):
            raise ValueError(
                f"Field at offset {offset} claims {length} bytes, "
                f"only {len(blob) - start} remain"
            )
        yield offset, blob[start:end]
        offset = end
