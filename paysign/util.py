import hashlib
import hmac
import re
from typing import Iterable

_HEX_SIG = re.compile(r"[0-9a-f]{64}")

def utf8(s: str) -> bytes:
    return s.encode("utf-8")

def concat_bytes(chunks: Iterable[bytes]) -> bytes:
    return b"".join(chunks)

def hmac_sha256_hex(key: bytes, msg: bytes) -> str:
    return hmac.new(key, msg, hashlib.sha256).hexdigest()

def is_hex_signature(s: object) -> bool:
    # lowercase only, exactly one SHA-256 digest
    return isinstance(s, str) and _HEX_SIG.fullmatch(s) is not None
