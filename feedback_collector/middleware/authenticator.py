"""Bearer-token authentication at the request boundary.

Each request moves once from unchecked to either ``Authenticated`` or
``Rejected``; both outcomes are final. The authenticated identity comes only
from a verified token, never from anything else the caller sends.
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from feedback_collector.services.tokens import (
    AuthError,
    AuthFailureReason,
    MalformedCredentialError,
    MissingCredentialError,
    SessionClaims,
    TokenService,
)

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"


@dataclass(frozen=True)
class Authenticated:
    """A request whose bearer token verified successfully."""

    user_id: UUID
    claims: SessionClaims


@dataclass(frozen=True)
class Rejected:
    """A request that failed authentication."""

    reason: AuthFailureReason


AuthOutcome = Authenticated | Rejected


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` value.

    Exactly two space-separated parts are accepted, the first being the
    literal ``Bearer``.
    """
    if not authorization:
        raise MissingCredentialError("Authorization header is required")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != BEARER_SCHEME or not parts[1]:
        raise MalformedCredentialError("Authorization header format must be Bearer {token}")
    return parts[1]


class RequestAuthenticator:
    """Resolve the Authorization header of a request into an AuthOutcome."""

    def __init__(self, tokens: TokenService):
        self.tokens = tokens

    def authenticate(self, authorization: str | None) -> AuthOutcome:
        try:
            token = extract_bearer_token(authorization)
            claims = self.tokens.verify(token)
        except AuthError as e:
            logger.debug(f"Authentication rejected: {e.reason.value}")
            return Rejected(reason=e.reason)
        return Authenticated(user_id=claims.user_id, claims=claims)
