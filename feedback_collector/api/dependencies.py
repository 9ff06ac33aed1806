"""Shared FastAPI dependencies.

The stateless components (credential store, token service, authenticator)
are built once in ``create_app`` and kept on ``app.state``; request-scoped
services are assembled here around a per-request database session.
"""

import logging

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from feedback_collector.core.database import get_db
from feedback_collector.middleware.authenticator import (
    Authenticated,
    Rejected,
    RequestAuthenticator,
)
from feedback_collector.services.accounts import AccountService
from feedback_collector.services.credentials import CredentialStore
from feedback_collector.services.feedback import FeedbackService
from feedback_collector.services.rooms import RoomService
from feedback_collector.services.tokens import AuthFailureReason, TokenService

logger = logging.getLogger(__name__)

# Token failures share one message so callers cannot tell which check failed
_REJECTION_DETAIL = {
    AuthFailureReason.MISSING_CREDENTIAL: "Authentication required",
    AuthFailureReason.MALFORMED_CREDENTIAL: "Authorization header format must be Bearer {token}",
}
_TOKEN_REJECTION_DETAIL = "Invalid or expired token"


def get_credential_store(request: Request) -> CredentialStore:
    return request.app.state.credentials


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_authenticator(request: Request) -> RequestAuthenticator:
    return request.app.state.authenticator


def get_account_service(
    db: AsyncSession = Depends(get_db),
    credentials: CredentialStore = Depends(get_credential_store),
) -> AccountService:
    return AccountService(db, credentials)


def get_room_service(
    db: AsyncSession = Depends(get_db),
    credentials: CredentialStore = Depends(get_credential_store),
) -> RoomService:
    return RoomService(db, credentials)


def get_feedback_service(db: AsyncSession = Depends(get_db)) -> FeedbackService:
    return FeedbackService(db)


async def get_current_user(
    request: Request,
    authenticator: RequestAuthenticator = Depends(get_authenticator),
) -> Authenticated:
    """Dependency yielding the verified identity of the caller.

    Handlers that depend on this never run for a rejected request.
    """
    outcome = authenticator.authenticate(request.headers.get("Authorization"))
    if isinstance(outcome, Rejected):
        logger.info(
            f"Rejected {request.method} {request.url.path}: {outcome.reason.value}"
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=_REJECTION_DETAIL.get(outcome.reason, _TOKEN_REJECTION_DETAIL),
            headers={"WWW-Authenticate": "Bearer"},
        )
    return outcome
