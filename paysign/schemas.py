from pydantic import BaseModel, Field
from typing import Any, List

class SignRequest(BaseModel):
    payload: Any

class SignResponse(BaseModel):
    signature: str
    info: str
    alg: str = "HKDF-SHA256+HMAC-SHA256"

class VerifyRequest(BaseModel):
    payload: Any
    signature: str = Field(max_length=128)

class VerifyResult(BaseModel):
    valid: bool
    reason_codes: List[str] = Field(default_factory=list)
