"""Exceptions raised while building a PuTTY key file."""


class PuttyKeyError(ValueError):
    """Base class for key export failures."""


class MissingKeyMaterialError(PuttyKeyError):
    """Private exponent or a CRT parameter is absent."""

    def __init__(self, missing):
        self.missing = tuple(missing)
        super().__init__(
            f"Private key material missing: {', '.join(self.missing)}"
        )


class InvalidKeyMaterialError(PuttyKeyError):
    """A magnitude is not a byte sequence, or the key is not RSA."""
