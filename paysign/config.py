from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # Core
    env: str = Field(default="prod", alias="PAYSIGN_ENV")
    log_level: str = Field(default="INFO", alias="PAYSIGN_LOG_LEVEL")

    # Shared secrets, JSON array. Order matters and must match every verifier.
    signing_secrets: List[str] = Field(default_factory=list, alias="PAYSIGN_SECRETS")

    # Public derivation parameters
    signing_salt: str = Field(default="", alias="PAYSIGN_SALT")
    signing_info: str = Field(default="payload-signing", alias="PAYSIGN_INFO")

    allowed_origins: str = Field(default="*", alias="PAYSIGN_ALLOWED_ORIGINS")

    # Security controls
    max_body_bytes: int = 64_000

    @property
    def allowed_origins_list(self):
        v = (self.allowed_origins or "*").strip()
        if v == "*" or v == "":
            return ["*"]
        return [x.strip() for x in v.split(",") if x.strip()]


settings = Settings()
