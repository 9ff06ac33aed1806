# Feedback Collector Services
from feedback_collector.services.accounts import (
    AccountService,
    ConflictError,
    DuplicateEmailError,
    InvalidCredentialsError,
)
from feedback_collector.services.credentials import (
    CredentialError,
    CredentialStore,
    HashFailureError,
    HashingConfig,
    MalformedHashError,
)
from feedback_collector.services.feedback import FeedbackService
from feedback_collector.services.room_access import (
    RoomAccessError,
    RoomAccessGuard,
    WrongSecretError,
)
from feedback_collector.services.rooms import (
    OwnerNotFoundError,
    RoomIdExhaustedError,
    RoomService,
)
from feedback_collector.services.tokens import (
    AuthError,
    AuthFailureReason,
    BadSignatureError,
    MalformedCredentialError,
    MalformedTokenError,
    MissingCredentialError,
    SessionClaims,
    TokenConfig,
    TokenExpiredError,
    TokenService,
)

__all__ = [
    "AccountService",
    "AuthError",
    "AuthFailureReason",
    "BadSignatureError",
    "ConflictError",
    "CredentialError",
    "CredentialStore",
    "DuplicateEmailError",
    "FeedbackService",
    "HashFailureError",
    "HashingConfig",
    "InvalidCredentialsError",
    "MalformedCredentialError",
    "MalformedHashError",
    "MalformedTokenError",
    "MissingCredentialError",
    "RoomAccessError",
    "RoomAccessGuard",
    "OwnerNotFoundError",
    "RoomIdExhaustedError",
    "RoomService",
    "SessionClaims",
    "TokenConfig",
    "TokenExpiredError",
    "TokenService",
    "WrongSecretError",
]
