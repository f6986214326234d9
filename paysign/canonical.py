from __future__ import annotations
import math
from typing import Any
import orjson
from pydantic import BaseModel
from paysign.errors import CanonicalizationError

_SCALARS = (str, int, float, bool, type(None))

# Largest magnitude a JS number holds as an exact integer.
_MAX_SAFE_INT = 2**53


def _normalize(value: Any, active: set[int]) -> Any:
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    if isinstance(value, float) and not math.isfinite(value):
        raise CanonicalizationError("non-finite number in payload")
    if isinstance(value, float) and value.is_integer() and abs(value) < _MAX_SAFE_INT:
        # 1.0 renders as "1", -0.0 as "0", matching JSON.stringify
        return int(value)
    if isinstance(value, _SCALARS):
        return value

    if isinstance(value, (list, tuple, dict)):
        marker = id(value)
        if marker in active:
            raise CanonicalizationError("cyclic reference in payload")
        active.add(marker)
        try:
            if isinstance(value, dict):
                out = {}
                for k in sorted(_check_keys(value)):
                    out[k] = _normalize(value[k], active)
                return out
            return [_normalize(v, active) for v in value]
        finally:
            active.discard(marker)

    raise CanonicalizationError(f"unsupported value of type {type(value).__name__}")


def _check_keys(mapping: dict) -> list[str]:
    keys = list(mapping.keys())
    for k in keys:
        if not isinstance(k, str):
            raise CanonicalizationError(f"mapping key of type {type(k).__name__}; keys must be str")
    return keys


def canonicalize(payload: Any) -> bytes:
    # Strings are taken verbatim; the caller owns their formatting.
    # Everything else: keys sorted recursively, sequences in original order,
    # compact UTF-8 JSON.
    if isinstance(payload, str):
        try:
            return payload.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise CanonicalizationError("payload string is not encodable as UTF-8 (lone surrogate)") from exc
    normalized = _normalize(payload, set())
    try:
        return orjson.dumps(normalized)
    except orjson.JSONEncodeError as exc:
        # e.g. integers beyond 64 bits, lone surrogates in nested strings
        raise CanonicalizationError(str(exc)) from exc
