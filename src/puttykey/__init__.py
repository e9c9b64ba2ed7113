"""Export RSA key pairs as unencrypted PuTTY (PPK v2) private key files."""

from puttykey.blobs import KEY_TYPE, RsaKeyMaterial, build_private_blob, build_public_blob
from puttykey.errors import InvalidKeyMaterialError, MissingKeyMaterialError, PuttyKeyError
from puttykey.mac import build_mac_input, compute_private_mac
from puttykey.ppk import DEFAULT_COMMENT, FORMAT_TAG, render_document, to_putty_private_key, wrap_lines
from puttykey.wire import PAD_CONDITIONAL, PAD_FORCED, PAD_NONE, encode_magnitude, put_prefixed

__all__ = [
    "DEFAULT_COMMENT",
    "FORMAT_TAG",
    "KEY_TYPE",
    "PAD_CONDITIONAL",
    "PAD_FORCED",
    "PAD_NONE",
    "InvalidKeyMaterialError",
    "MissingKeyMaterialError",
    "PuttyKeyError",
    "RsaKeyMaterial",
    "build_mac_input",
    "build_private_blob",
    "build_public_blob",
    "compute_private_mac",
    "encode_magnitude",
    "put_prefixed",
    "render_document",
    "to_putty_private_key",
    "wrap_lines",
]
