"""Authentication API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from feedback_collector.api.dependencies import (
    get_account_service,
    get_current_user,
    get_token_service,
)
from feedback_collector.middleware.authenticator import Authenticated
from feedback_collector.models.account import Account
from feedback_collector.schemas.auth import (
    AccountResponse,
    AuthResponse,
    LoginRequest,
    RegisterRequest,
)
from feedback_collector.services.accounts import (
    AccountService,
    DuplicateEmailError,
    InvalidCredentialsError,
)
from feedback_collector.services.tokens import TokenService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(account: Account, tokens: TokenService) -> AuthResponse:
    return AuthResponse(
        token=tokens.issue(account.id),
        expires_in=tokens.lifetime_seconds,
        user=AccountResponse.model_validate(account),
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    request: RegisterRequest,
    account_service: AccountService = Depends(get_account_service),
    tokens: TokenService = Depends(get_token_service),
) -> AuthResponse:
    """Create an account and return a session token.

    Returns 409 Conflict if the email is already registered.
    """
    try:
        account = await account_service.register(
            email=request.email,
            password=request.password,
        )
    except DuplicateEmailError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        ) from e

    return _auth_response(account, tokens)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    account_service: AccountService = Depends(get_account_service),
    tokens: TokenService = Depends(get_token_service),
) -> AuthResponse:
    """Authenticate with email and password and return a fresh session token."""
    try:
        account = await account_service.authenticate(
            email=request.email,
            password=request.password,
        )
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        ) from e

    logger.info(f"Account logged in: {account.id}")
    return _auth_response(account, tokens)


@router.get("/me", response_model=AccountResponse)
async def get_current_account(
    current_user: Authenticated = Depends(get_current_user),
    account_service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Get the authenticated account."""
    account = await account_service.get_by_id(current_user.user_id)
    if account is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return AccountResponse.model_validate(account)
