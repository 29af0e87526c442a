# =============================================================================
# tests/test_token_service.py - TokenService Tests
# =============================================================================
# Covers sign/verify round trips, rejection of foreign, expired, tampered and
# malformed tokens, signing failures, and that the secret never reaches logs.
#
# Run with: pytest tests/test_token_service.py -v
# =============================================================================

import base64
import json
import logging
import time
from datetime import timedelta

import pytest
from pydantic import ValidationError

from core.models.token import TokenConfig
from core.services.token_service import (
    TokenError,
    TokenService,
    TokenSigningError,
    TokenVerificationError,
)


def _b64url(data: dict) -> str:
    raw = json.dumps(data, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


# =============================================================================
# Round Trip
# =============================================================================

class TestSignAndVerify:
    """verify(sign(P)) returns P plus iat/exp."""

    def test_concrete_scenario(self, token_service):
        """Test the documented {id, role} example."""
        token = token_service.sign({"id": 42, "role": "admin"})

        assert isinstance(token, str)
        assert token.count(".") == 2

        claims = token_service.verify(token)
        assert claims == {
            "id": 42,
            "role": "admin",
            "iat": claims["iat"],
            "exp": claims["exp"],
        }
        assert claims["exp"] - claims["iat"] == 3600

    def test_iat_is_now(self, token_service):
        """Test that iat defaults to the current time."""
        before = int(time.time())
        claims = token_service.verify(token_service.sign({"id": 1}))
        after = int(time.time())

        assert before <= claims["iat"] <= after

    @pytest.mark.parametrize("payload", [
        {},
        {"email": "a@example.com"},
        {"nested": {"roles": ["user", "admin"], "active": True}, "score": 1.5},
        {"unicode": "café ✓", "nothing": None},
        # Registered claims with non-standard values still round-trip
        {"sub": 42, "aud": "other-service", "jti": 7},
        {"at_hash": "abc"},
        # nbf in the past
        {"nbf": 1_000_000_000},
        {"nbf": 1_000_000_000.5},
    ])
    def test_round_trip_contains_payload(self, token_service, payload):
        """Test that every JSON-serializable mapping round-trips."""
        claims = token_service.verify(token_service.sign(payload))

        for key, value in payload.items():
            assert claims[key] == value
        assert set(claims) == set(payload) | {"iat", "exp"}

    def test_sign_does_not_mutate_payload(self, token_service):
        """Test that iat/exp are not written back into the caller's dict."""
        payload = {"id": 1}
        token_service.sign(payload)
        assert payload == {"id": 1}

    def test_explicit_iat_is_honoured(self, token_service):
        """Test that a caller-supplied iat drives exp."""
        issued_at = int(time.time()) - 60
        claims = token_service.verify(token_service.sign({"iat": issued_at}))

        assert claims["iat"] == issued_at
        assert claims["exp"] == issued_at + 3600

    def test_expiry_follows_config(self):
        """Test that exp uses the configured lifetime."""
        service = TokenService(TokenConfig(secret="s", expires_in=timedelta(days=1)))
        claims = service.verify(service.sign({"id": 1}))

        assert claims["exp"] - claims["iat"] == 86400
        assert service.expires_in_seconds == 86400

    @pytest.mark.parametrize("algorithm", ["HS384", "HS512"])
    def test_other_hmac_algorithms(self, algorithm):
        """Test signing with the other HMAC algorithms."""
        service = TokenService(TokenConfig(
            secret="s", expires_in=timedelta(minutes=5), algorithm=algorithm
        ))
        assert service.verify(service.sign({"id": 1}))["id"] == 1


# =============================================================================
# Verification Failures
# =============================================================================

class TestVerifyRejects:
    """Everything that is not a live token from this secret is rejected."""

    def test_different_secret(self, token_service):
        """Test that a token from another secret fails."""
        other = TokenService(TokenConfig(secret="another-secret", expires_in=timedelta(hours=1)))
        token = other.sign({"id": 42})

        with pytest.raises(TokenVerificationError):
            token_service.verify(token)

    def test_expired(self, token_service):
        """Test that a token past its exp fails."""
        token = token_service.sign({"id": 42, "iat": int(time.time()) - 7200})

        with pytest.raises(TokenVerificationError):
            token_service.verify(token)

    def test_tampered_payload(self, token_service):
        """Test that swapping the payload segment breaks the signature."""
        token = token_service.sign({"id": 42, "role": "user"})
        header, _, signature = token.split(".")

        claims = token_service.verify(token)
        forged = _b64url({**claims, "role": "admin"})

        with pytest.raises(TokenVerificationError):
            token_service.verify(f"{header}.{forged}.{signature}")

    def test_algorithm_mismatch(self, token_config):
        """Test that only the configured algorithm is accepted."""
        hs512 = TokenService(TokenConfig(
            secret="unit-test-secret", expires_in=timedelta(hours=1), algorithm="HS512"
        ))
        token = hs512.sign({"id": 1})

        with pytest.raises(TokenVerificationError):
            TokenService(token_config).verify(token)

    @pytest.mark.parametrize("token", [
        "",
        "not-a-token",
        "a.b.c",
        "....",
        "eyJhbGciOiJIUzI1NiJ9.eyJpZCI6NDJ9",
    ])
    def test_malformed(self, token_service, token):
        """Test that strings not produced by sign() fail."""
        with pytest.raises(TokenVerificationError):
            token_service.verify(token)

    @pytest.mark.parametrize("token", [None, 123, b"bytes"])
    def test_non_string(self, token_service, token):
        """Test that non-string input fails the same way."""
        with pytest.raises(TokenVerificationError):
            token_service.verify(token)

    def test_errors_are_opaque(self, token_service):
        """Test that expired and tampered tokens raise the same generic error."""
        expired = token_service.sign({"iat": int(time.time()) - 7200})

        errors = []
        for token in (expired, "a.b.c"):
            with pytest.raises(TokenVerificationError) as exc_info:
                token_service.verify(token)
            errors.append(exc_info.value)

        assert {e.message for e in errors} == {"Invalid token"}
        assert {e.code for e in errors} == {"INVALID_TOKEN"}
        for e in errors:
            assert e.__cause__ is None
            assert e.__suppress_context__ is True

    def test_verification_error_is_token_error(self):
        """Test the error hierarchy."""
        assert issubclass(TokenVerificationError, TokenError)
        assert issubclass(TokenSigningError, TokenError)
        assert not issubclass(TokenSigningError, TokenVerificationError)


# =============================================================================
# Signing Failures
# =============================================================================

class TestSignRejects:
    """Payloads that cannot be signed raise TokenSigningError."""

    @pytest.mark.parametrize("payload", [
        ["not", "a", "mapping"],
        "string-payload",
        None,
        {"exp": 123},
        {"value": object()},
        {"when": {1, 2, 3}},
        {"iat": "yesterday"},
        {"iat": True},
        {"iat": float("inf")},
        {"iat": float("nan")},
        {"iat": 10 ** 400},
        {"nbf": "soon"},
        {"nbf": None},
        {"nbf": False},
        {"nbf": float("-inf")},
    ])
    def test_unsignable_payload(self, token_service, payload):
        """Test each unsignable payload shape."""
        with pytest.raises(TokenSigningError) as exc_info:
            token_service.sign(payload)

        assert exc_info.value.message == "Failed to authenticate token"
        assert exc_info.value.code == "TOKEN_SIGNING_FAILED"
        assert exc_info.value.__cause__ is None


# =============================================================================
# Logging
# =============================================================================

class TestLogging:
    """Failures are logged with context, never with the secret."""

    def test_sign_failure_logs_payload_not_secret(self, token_service, caplog):
        """Test the signing failure log record."""
        with caplog.at_level(logging.ERROR, logger="core.services.token_service"):
            with pytest.raises(TokenSigningError):
                token_service.sign({"marker": "payload-marker", "exp": 1})

        assert "Failed to sign token" in caplog.text
        assert "payload-marker" in caplog.text
        assert "unit-test-secret" not in caplog.text

    def test_verify_failure_logs_token_not_secret(self, token_service, caplog):
        """Test the verification failure log record."""
        with caplog.at_level(logging.WARNING, logger="core.services.token_service"):
            with pytest.raises(TokenVerificationError):
                token_service.verify("token-marker")

        assert "Invalid token" in caplog.text
        assert "token-marker" in caplog.text
        assert "unit-test-secret" not in caplog.text


# =============================================================================
# TokenConfig
# =============================================================================

class TestTokenConfig:
    """Tests for TokenConfig validation."""

    def test_secret_hidden_in_repr(self, token_config):
        """Test that the secret never shows up in repr/str."""
        assert "unit-test-secret" not in repr(token_config)
        assert "unit-test-secret" not in str(token_config)

    def test_frozen(self, token_config):
        """Test that the config is immutable."""
        with pytest.raises(ValidationError):
            token_config.algorithm = "HS512"

    def test_rejects_empty_secret(self):
        """Test that an empty secret is rejected."""
        with pytest.raises(ValidationError):
            TokenConfig(secret="", expires_in=timedelta(hours=1))

    def test_rejects_non_positive_expiry(self):
        """Test that expiry must be positive."""
        with pytest.raises(ValidationError):
            TokenConfig(secret="s", expires_in=timedelta(0))

    def test_rejects_asymmetric_algorithm(self):
        """Test that only HMAC algorithms are accepted."""
        with pytest.raises(ValidationError):
            TokenConfig(secret="s", expires_in=timedelta(hours=1), algorithm="RS256")

    def test_algorithm_normalized(self):
        """Test that the algorithm name is upper-cased."""
        config = TokenConfig(secret="s", expires_in=timedelta(hours=1), algorithm="hs384")
        assert config.algorithm == "HS384"
