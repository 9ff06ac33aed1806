"""Session token issuance and verification.

Tokens are compact HS256 JWTs (``header.payload.signature``) carrying the
account id and a fixed validity window. They are fully self-contained:
nothing about an issued token is stored server-side, so rotating the
signing key invalidates every outstanding token.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from uuid import UUID

import jwt
from jwt.exceptions import (
    DecodeError,
    InvalidAlgorithmError,
    InvalidSignatureError,
    PyJWTError,
)

from feedback_collector.core.config import Settings

logger = logging.getLogger(__name__)

# Every token is valid for exactly this long; not configurable
TOKEN_LIFETIME = timedelta(hours=24)

REQUIRED_CLAIMS = ["user_id", "iat", "nbf", "exp", "iss"]


class AuthFailureReason(str, Enum):
    """Why a request failed authentication."""

    MISSING_CREDENTIAL = "missing_credential"
    MALFORMED_CREDENTIAL = "malformed_credential"
    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"
    EXPIRED = "expired"


class AuthError(Exception):
    """Base authentication error."""

    reason: AuthFailureReason

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message)


class MissingCredentialError(AuthError):
    """No bearer credential was supplied."""

    reason = AuthFailureReason.MISSING_CREDENTIAL


class MalformedCredentialError(AuthError):
    """The Authorization header is not exactly ``Bearer <token>``."""

    reason = AuthFailureReason.MALFORMED_CREDENTIAL


class MalformedTokenError(AuthError):
    """The token does not parse or lacks required claims."""

    reason = AuthFailureReason.MALFORMED


class BadSignatureError(AuthError):
    """Signature mismatch, or the token names a foreign algorithm."""

    reason = AuthFailureReason.BAD_SIGNATURE


class TokenExpiredError(AuthError):
    """The current time is outside the token's validity window."""

    reason = AuthFailureReason.EXPIRED


@dataclass(frozen=True)
class TokenConfig:
    """Signing parameters, fixed for the lifetime of the process."""

    secret_key: str
    algorithm: str = "HS256"
    issuer: str = "feedback-collector"

    @classmethod
    def from_settings(cls, config: Settings) -> "TokenConfig":
        return cls(
            secret_key=config.jwt_secret_key,
            algorithm=config.jwt_algorithm,
            issuer=config.jwt_issuer,
        )


@dataclass(frozen=True)
class SessionClaims:
    """Verified contents of a session token."""

    user_id: UUID
    issued_at: datetime
    not_before: datetime
    expires_at: datetime
    issuer: str


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """Mint and verify session tokens with a single symmetric key."""

    def __init__(self, config: TokenConfig, clock: Callable[[], datetime] = _utcnow):
        self.config = config
        self._clock = clock

    @property
    def lifetime_seconds(self) -> int:
        return int(TOKEN_LIFETIME.total_seconds())

    def issue(self, user_id: UUID) -> str:
        """Create a signed token for ``user_id``."""
        now = self._clock().replace(microsecond=0)
        payload = {
            "user_id": str(user_id),
            "iat": now,
            "nbf": now,
            "exp": now + TOKEN_LIFETIME,
            "iss": self.config.issuer,
        }
        return jwt.encode(payload, self.config.secret_key, algorithm=self.config.algorithm)

    def verify(self, token: str) -> SessionClaims:
        """Verify a token and return its claims.

        Raises:
            MalformedTokenError: structure, claims or issuer are invalid
            BadSignatureError: signature mismatch or foreign algorithm
            TokenExpiredError: now is after exp (or before nbf)
        """
        try:
            header = jwt.get_unverified_header(token)
        except DecodeError as e:
            raise MalformedTokenError("Token could not be parsed") from e

        # Checked before decoding so "none" or an asymmetric algorithm can
        # never select a different verification path.
        if header.get("alg") != self.config.algorithm:
            logger.debug(f"Rejected token with algorithm {header.get('alg')!r}")
            raise BadSignatureError("Unexpected signing algorithm")

        try:
            payload = jwt.decode(
                token,
                self.config.secret_key,
                algorithms=[self.config.algorithm],
                issuer=self.config.issuer,
                options={
                    "require": REQUIRED_CLAIMS,
                    # Time checks are done below against our own clock
                    "verify_exp": False,
                    "verify_nbf": False,
                    "verify_iat": False,
                },
            )
        except (InvalidSignatureError, InvalidAlgorithmError) as e:
            raise BadSignatureError("Token signature mismatch") from e
        except PyJWTError as e:
            raise MalformedTokenError(f"Invalid token: {e}") from e

        claims = self._parse_claims(payload)

        now = self._clock()
        if now > claims.expires_at or now < claims.not_before:
            raise TokenExpiredError("Token has expired")
        return claims

    def _parse_claims(self, payload: dict) -> SessionClaims:
        try:
            return SessionClaims(
                user_id=UUID(str(payload["user_id"])),
                issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=UTC),
                not_before=datetime.fromtimestamp(int(payload["nbf"]), tz=UTC),
                expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=UTC),
                issuer=str(payload["iss"]),
            )
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise MalformedTokenError("Token claims are invalid") from e
