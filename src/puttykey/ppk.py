"""
Render RSA key material as a PuTTY-User-Key-File-2 document.

Usage:
    material = RsaKeyMaterial.from_private_key(key)
    text = to_putty_private_key(material, comment="me@host")
"""

from __future__ import annotations

import base64
import logging

from puttykey.blobs import KEY_TYPE, RsaKeyMaterial, build_private_blob, build_public_blob
from puttykey.errors import InvalidKeyMaterialError
from puttykey.mac import ENCRYPTION_NONE, compute_private_mac

logger = logging.getLogger(__name__)

FORMAT_TAG = "PuTTY-User-Key-File-2"
DEFAULT_COMMENT = "imported-openssh-key"
LINE_LENGTH = 64
DEFAULT_NEWLINE = "\r\n"
NEWLINES = ("\r\n", "\n")


def wrap_lines(text: str, width: int = LINE_LENGTH) -> list[str]:
    """Split text into width-sized chunks; the last may be shorter."""
    if width <= 0:
        raise ValueError(f"Line width must be positive, got {width}")
    return [text[i:i + width] for i in range(0, len(text), width)]


def render_document(
    public_blob: bytes,
    private_blob: bytes,
    comment: str = DEFAULT_COMMENT,
    newline: str = DEFAULT_NEWLINE,
) -> str:
    """Assemble header, both blob sections and the Private-MAC line."""
    if not isinstance(comment, str):
        raise InvalidKeyMaterialError(
            f"comment must be a str, got {type(comment).__name__}"
        )
    if newline not in NEWLINES:
        raise ValueError(f"Line terminator must be CRLF or LF, got {newline!r}")

    mac = compute_private_mac(KEY_TYPE, ENCRYPTION_NONE, comment, public_blob, private_blob)
    public_lines = wrap_lines(base64.b64encode(public_blob).decode("ascii"))
    private_lines = wrap_lines(base64.b64encode(private_blob).decode("ascii"))

    lines = [
        f"{FORMAT_TAG}: {KEY_TYPE}",
        f"Encryption: {ENCRYPTION_NONE}",
        f"Comment: {comment}",
        f"Public-Lines: {len(public_lines)}",
        *public_lines,
        f"Private-Lines: {len(private_lines)}",
        *private_lines,
        f"Private-MAC: {mac}",
    ]
    logger.debug(
        "Rendered PPK document: %d public lines, %d private lines",
        len(public_lines),
        len(private_lines),
    )
    return "".join(line + newline for line in lines)


def to_putty_private_key(
    material: RsaKeyMaterial,
    comment: str = DEFAULT_COMMENT,
    newline: str = DEFAULT_NEWLINE,
) -> str:
    """
    Encode an RSA key pair as an unencrypted PuTTY v2 private key file.

    Raises:
        MissingKeyMaterialError: material carries no private exponent or
            is missing a CRT parameter
        InvalidKeyMaterialError: a magnitude is not a byte sequence
    """
    if not isinstance(material, RsaKeyMaterial):
        raise InvalidKeyMaterialError(
            f"Expected RsaKeyMaterial, got {type(material).__name__}"
        )

    public_blob = build_public_blob(material.exponent, material.modulus)
    private_blob = build_private_blob(material.d, material.p, material.q, material.inverse_q)
    return render_document(public_blob, private_blob, comment, newline)
