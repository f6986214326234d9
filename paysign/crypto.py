from __future__ import annotations
from dataclasses import dataclass, field
from typing import Sequence
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from paysign.errors import InvalidSecretsError, KeyDerivationError, SigningError
from paysign.util import concat_bytes, hmac_sha256_hex, utf8

KEY_LENGTH = 32  # 256-bit HMAC-SHA256 key

@dataclass(frozen=True)
class DerivedKey:
    raw: bytes = field(repr=False)

    def __repr__(self) -> str:
        return "DerivedKey(<redacted>)"

def compose_key_material(secrets: Sequence[str]) -> bytes:
    """Concatenate UTF-8 encoded secrets, in the given order, into the IKM.

    No delimiter and no sorting: ["s1", "s2"] and ["s2", "s1"] yield
    different key material.
    """
    if not secrets:
        raise InvalidSecretsError("secrets must be a non-empty list of str")
    for i, s in enumerate(secrets):
        if not isinstance(s, str):
            raise InvalidSecretsError(f"secret at index {i} is {type(s).__name__}, expected str")
    try:
        return concat_bytes(utf8(s) for s in secrets)
    except UnicodeEncodeError:
        # never echo the secret itself
        raise InvalidSecretsError("secret is not encodable as UTF-8 (lone surrogate)") from None

def derive_signing_key(ikm: bytes, salt: str, info: str) -> DerivedKey:
    if not isinstance(salt, str) or not isinstance(info, str):
        raise KeyDerivationError("salt and info must be str")
    # Empty salt is passed as None: RFC 5869 pads it to HashLen zeros either way.
    try:
        hkdf = HKDF(
            algorithm=hashes.SHA256(),
            length=KEY_LENGTH,
            salt=utf8(salt) or None,
            info=utf8(info),
        )
        return DerivedKey(raw=hkdf.derive(ikm))
    except (UnsupportedAlgorithm, TypeError, ValueError) as exc:
        raise KeyDerivationError(f"HKDF-SHA256 derivation failed: {type(exc).__name__}") from exc

def hmac_sign_hex(msg: bytes, key: DerivedKey) -> str:
    try:
        return hmac_sha256_hex(key.raw, msg)
    except (TypeError, ValueError) as exc:
        raise SigningError(f"HMAC-SHA256 failed: {type(exc).__name__}") from exc
