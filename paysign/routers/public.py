import hmac
import logging
from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from paysign.config import settings
from paysign.errors import CanonicalizationError, InvalidSecretsError, PayloadSigningError
from paysign.metrics import SIGNED, VERIFY_FAIL
from paysign.schemas import SignRequest, SignResponse, VerifyRequest, VerifyResult
from paysign.signing import SigningOptions, sign_payload
from paysign.util import is_hex_signature

logger = logging.getLogger("paysign.routers.public")

router = APIRouter(tags=["public"])


def _options() -> SigningOptions:
    return SigningOptions(salt=settings.signing_salt, info=settings.signing_info)


def _sign_or_http(payload) -> str:
    try:
        return sign_payload(payload, settings.signing_secrets, _options())
    except InvalidSecretsError:
        raise HTTPException(status_code=503, detail="signing_not_configured")
    except CanonicalizationError:
        raise HTTPException(status_code=422, detail="payload_not_canonicalizable")
    except PayloadSigningError as exc:
        logger.error("signing_failed kind=%s", type(exc).__name__)
        raise HTTPException(status_code=500, detail="signing_failed")


@router.get("/")
def root():
    return {"name": "paysign", "version": "1.0.0", "alg": "HKDF-SHA256+HMAC-SHA256"}


@router.get("/health")
def health():
    return {"ok": True, "configured": bool(settings.signing_secrets)}


@router.get("/metrics")
def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


@router.post("/sign", response_model=SignResponse)
def sign(req: SignRequest):
    sig = _sign_or_http(req.payload)
    SIGNED.labels(op="sign").inc()
    return SignResponse(signature=sig, info=settings.signing_info)


@router.post("/verify", response_model=VerifyResult)
def verify(req: VerifyRequest):
    reasons = []
    if not is_hex_signature(req.signature):
        reasons.append("bad_signature_format")
    else:
        expected = _sign_or_http(req.payload)
        SIGNED.labels(op="verify").inc()
        if not hmac.compare_digest(expected, req.signature):
            reasons.append("signature_mismatch")
    for r in reasons:
        VERIFY_FAIL.labels(reason=r).inc()
    return VerifyResult(valid=not reasons, reason_codes=reasons)
