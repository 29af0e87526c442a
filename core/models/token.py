# =============================================================================
# core/models/token.py - Token Configuration
# =============================================================================
# TokenConfig is built once at process start (see app.config.Settings) and
# handed to TokenService. The secret is a SecretStr so it never shows up in
# reprs or log lines.
# =============================================================================

from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

DEFAULT_ALGORITHM = "HS256"


class TokenConfig(BaseModel):
    """
    Immutable signing configuration for bearer tokens.

    Example:
        TokenConfig(secret="s3cret", expires_in=timedelta(days=1))
    """
    model_config = ConfigDict(frozen=True)

    secret: SecretStr = Field(..., description="HMAC secret for sign and verify")
    expires_in: timedelta = Field(..., description="Lifetime applied at sign time")
    algorithm: str = Field(default=DEFAULT_ALGORITHM, description="JWS algorithm")

    @field_validator("secret")
    @classmethod
    def secret_not_empty(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            raise ValueError("secret must not be empty")
        return v

    @field_validator("expires_in")
    @classmethod
    def expiry_is_positive(cls, v: timedelta) -> timedelta:
        if v.total_seconds() <= 0:
            raise ValueError("expires_in must be a positive duration")
        return v

    @field_validator("algorithm")
    @classmethod
    def algorithm_is_hmac(cls, v: str) -> str:
        v = v.upper()
        if v not in ("HS256", "HS384", "HS512"):
            raise ValueError("only HMAC algorithms (HS256, HS384, HS512) are supported")
        return v
