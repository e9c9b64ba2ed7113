from __future__ import annotations

import logging
from dataclasses import dataclass

from cryptography.hazmat.primitives.asymmetric import rsa

from puttykey.errors import InvalidKeyMaterialError, MissingKeyMaterialError
from puttykey.wire import (
    PAD_CONDITIONAL,
    PAD_FORCED,
    ByteLike,
    as_magnitude,
    put_mpint,
    put_string,
)

logger = logging.getLogger(__name__)

KEY_TYPE = "ssh-rsa"

# Field order is part of the PPK private blob layout.
PRIVATE_FIELDS = ("d", "p", "q", "inverse_q")


def int_to_magnitude(value: int, name: str = "value") -> bytes:
    """Minimal big-endian magnitude of a non-negative int; 0 gives b''."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidKeyMaterialError(
            f"{name} must be an int, got {type(value).__name__}"
        )
    if value < 0:
        raise InvalidKeyMaterialError(f"{name} must be non-negative")
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


@dataclass(frozen=True)
class RsaKeyMaterial:
    """RSA parameters as unsigned big-endian magnitudes."""

    exponent: bytes
    modulus: bytes
    d: bytes | None = None
    p: bytes | None = None
    q: bytes | None = None
    inverse_q: bytes | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "exponent", as_magnitude(self.exponent, "exponent"))
        object.__setattr__(self, "modulus", as_magnitude(self.modulus, "modulus"))
        for name in PRIVATE_FIELDS:
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, as_magnitude(value, name))

    @property
    def has_private(self) -> bool:
        return all(getattr(self, name) is not None for name in PRIVATE_FIELDS)

    @classmethod
    def from_numbers(
        cls,
        e: int,
        n: int,
        d: int,
        p: int,
        q: int,
        iqmp: int | None = None,
    ) -> RsaKeyMaterial:
        if iqmp is None:
            iqmp = rsa.rsa_crt_iqmp(p, q)
        return cls(
            exponent=int_to_magnitude(e, "e"),
            modulus=int_to_magnitude(n, "n"),
            d=int_to_magnitude(d, "d"),
            p=int_to_magnitude(p, "p"),
            q=int_to_magnitude(q, "q"),
            inverse_q=int_to_magnitude(iqmp, "iqmp"),
        )

    @classmethod
    def from_private_key(cls, key: rsa.RSAPrivateKey) -> RsaKeyMaterial:
        """Extract material from a cryptography RSA private key."""
        if not isinstance(key, rsa.RSAPrivateKey):
            raise InvalidKeyMaterialError(
                f"Only RSA keys are supported, got {type(key).__name__}"
            )
        numbers = key.private_numbers()
        public = numbers.public_numbers
        return cls.from_numbers(
            public.e, public.n, numbers.d, numbers.p, numbers.q, numbers.iqmp
        )


def build_public_blob(exponent: ByteLike | None, modulus: ByteLike | None) -> bytes:
    """
    Public key blob: string "ssh-rsa", mpint e, mpint n.

    Both integers get a leading zero byte only when their high bit is set.
    """
    buf = bytearray()
    put_string(buf, KEY_TYPE)
    put_mpint(buf, exponent, PAD_CONDITIONAL, "exponent")
    put_mpint(buf, modulus, PAD_CONDITIONAL, "modulus")
    logger.debug("Built public blob (%d bytes)", len(buf))
    return bytes(buf)


def build_private_blob(
    d: ByteLike | None,
    p: ByteLike | None,
    q: ByteLike | None,
    inverse_q: ByteLike | None,
) -> bytes:
    """
    Private key blob: mpint d, p, q, iqmp, each with a forced zero byte.
    """
    values = dict(zip(PRIVATE_FIELDS, (d, p, q, inverse_q)))
    missing = [name for name, value in values.items() if value is None]
    if missing:
        raise MissingKeyMaterialError(missing)

    buf = bytearray()
    for name in PRIVATE_FIELDS:
        put_mpint(buf, values[name], PAD_FORCED, name)
    logger.debug("Built private blob (%d bytes)", len(buf))
    return bytes(buf)
