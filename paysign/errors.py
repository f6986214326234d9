from __future__ import annotations


class PayloadSigningError(Exception):
    """Base class for every failure raised while producing a payload signature."""


class InvalidSecretsError(PayloadSigningError, ValueError):
    """Secrets missing, empty, unordered or not strings."""


class CanonicalizationError(PayloadSigningError, ValueError):
    """Payload cannot be normalized into canonical bytes."""


class KeyDerivationError(PayloadSigningError):
    """HKDF rejected the key material or its parameters."""


class SigningError(PayloadSigningError):
    """HMAC computation over the canonical bytes failed."""
