"""
Private-MAC computation for unencrypted PuTTY v2 key files.

The HMAC key is SHA-1 of a fixed ASCII string (no passphrase is mixed in
when the file is not encrypted), so the tag only guards against edits to
the header fields and blobs.
"""

from typing import Union

from cryptography.hazmat.primitives import hashes, hmac

from puttykey.wire import put_prefixed, put_string

MAC_KEY_PASSPHRASE = b"putty-private-key-file-mac-key"
ENCRYPTION_NONE = "none"
MAC_HEX_LEN = 40


def derive_mac_key() -> bytes:
    """SHA-1 of MAC_KEY_PASSPHRASE; 20 bytes."""
    digest = hashes.Hash(hashes.SHA1())
    digest.update(MAC_KEY_PASSPHRASE)
    return digest.finalize()


MAC_KEY = derive_mac_key()


def build_mac_input(
    key_type: Union[str, bytes],
    encryption: Union[str, bytes],
    comment: Union[str, bytes],
    public_blob: bytes,
    private_blob: bytes,
) -> bytes:
    """Frame the header fields and both blobs as five prefixed strings."""
    buf = bytearray()
    put_string(buf, key_type)
    put_string(buf, encryption)
    put_string(buf, comment)
    put_prefixed(buf, public_blob)
    put_prefixed(buf, private_blob)
    return bytes(buf)


def compute_private_mac(
    key_type: Union[str, bytes],
    encryption: Union[str, bytes],
    comment: Union[str, bytes],
    public_blob: bytes,
    private_blob: bytes,
) -> str:
    """Return HMAC-SHA1 over the framed fields as 40 lowercase hex chars."""
    h = hmac.HMAC(MAC_KEY, hashes.SHA1())
    h.update(build_mac_input(key_type, encryption, comment, public_blob, private_blob))
    return h.finalize().hex()
