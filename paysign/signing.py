from __future__ import annotations
import hmac
import logging
from collections.abc import Set
from dataclasses import dataclass
from typing import Any, Iterable, Optional
from paysign.canonical import canonicalize
from paysign.crypto import compose_key_material, derive_signing_key, hmac_sign_hex
from paysign.errors import InvalidSecretsError, KeyDerivationError
from paysign.util import is_hex_signature

logger = logging.getLogger("paysign.signing")

DEFAULT_INFO = "payload-signing"


class SecretList(tuple):
    """Ordered, non-empty, immutable sequence of shared secrets.

    Order is part of the key: never sort or deduplicate one of these.
    """

    def __new__(cls, secrets: Iterable[str]):
        if isinstance(secrets, SecretList):
            return secrets
        if secrets is None or isinstance(secrets, (str, bytes, Set, dict)):
            raise InvalidSecretsError("secrets must be an ordered list of str")
        items = tuple(secrets)
        if not items:
            raise InvalidSecretsError("secrets must be a non-empty list of str")
        for i, s in enumerate(items):
            if not isinstance(s, str):
                raise InvalidSecretsError(f"secret at index {i} is {type(s).__name__}, expected str")
        return super().__new__(cls, items)

    def __repr__(self) -> str:
        return f"SecretList(<{len(self)} redacted>)"


@dataclass(frozen=True)
class SigningOptions:
    # Both public; signer and verifier must use identical values.
    salt: str = ""
    info: str = DEFAULT_INFO

    def __post_init__(self):
        if not isinstance(self.salt, str) or not isinstance(self.info, str):
            raise KeyDerivationError("salt and info must be str")


def sign_payload(payload: Any, secrets: Iterable[str], options: Optional[SigningOptions] = None) -> str:
    """Return the lowercase hex HMAC-SHA256 signature of ``payload``.

    The HMAC key is HKDF-SHA256(ikm=secrets joined in order, salt, info).
    Secrets are validated before any other work is done.
    """
    secret_list = SecretList(secrets)
    opts = options or SigningOptions()
    msg = canonicalize(payload)
    key = derive_signing_key(compose_key_material(secret_list), opts.salt, opts.info)
    sig = hmac_sign_hex(msg, key)
    logger.debug("payload_signed info=%s bytes=%d secrets=%d", opts.info, len(msg), len(secret_list))
    return sig


def verify_payload(payload: Any, secrets: Iterable[str], signature: str, options: Optional[SigningOptions] = None) -> bool:
    secret_list = SecretList(secrets)
    if not is_hex_signature(signature):
        logger.info("signature_rejected reason=bad_signature_format")
        return False
    expected = sign_payload(payload, secret_list, options)
    ok = hmac.compare_digest(expected, signature)
    if not ok:
        logger.info("signature_mismatch info=%s", (options or SigningOptions()).info)
    return ok


async def sign_payload_async(payload: Any, secrets: Iterable[str], options: Optional[SigningOptions] = None) -> str:
    # The backend is synchronous, so this completes without suspending.
    return sign_payload(payload, secrets, options)


async def verify_payload_async(payload: Any, secrets: Iterable[str], signature: str, options: Optional[SigningOptions] = None) -> bool:
    return verify_payload(payload, secrets, signature, options)
