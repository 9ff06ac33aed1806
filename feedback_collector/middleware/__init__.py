"""Middleware and request-boundary components."""

from feedback_collector.middleware.authenticator import (
    Authenticated,
    AuthOutcome,
    Rejected,
    RequestAuthenticator,
    extract_bearer_token,
)
from feedback_collector.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "Authenticated",
    "AuthOutcome",
    "Rejected",
    "RequestAuthenticator",
    "SecurityHeadersMiddleware",
    "extract_bearer_token",
]
