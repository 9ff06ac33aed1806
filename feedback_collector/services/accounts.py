"""Account service - registration, login and lookup."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from feedback_collector.models.account import Account
from feedback_collector.services.credentials import CredentialStore

logger = logging.getLogger(__name__)


class ConflictError(Exception):
    """A write conflicts with existing state."""


class DuplicateEmailError(ConflictError):
    """An account with this email already exists."""


class InvalidCredentialsError(Exception):
    """Unknown email or wrong password (deliberately indistinguishable)."""


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AccountService:
    """Service for account operations."""

    def __init__(self, db: AsyncSession, credentials: CredentialStore):
        self.db = db
        self.credentials = credentials

    async def register(self, email: str, password: str) -> Account:
        """Create an account.

        There is no existence pre-check: the unique index on ``email`` is the
        only source of truth, so two concurrent registrations for the same
        address yield one account and one DuplicateEmailError.
        """
        account = Account(
            email=normalize_email(email),
            password_hash=self.credentials.hash(password),
        )
        self.db.add(account)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise DuplicateEmailError("Email already registered") from e
        await self.db.refresh(account)

        logger.info(f"Registered account {account.id}")
        return account

    async def authenticate(self, email: str, password: str) -> Account:
        """Return the account for valid credentials.

        Raises InvalidCredentialsError for both unknown email and wrong
        password, spending comparable time on each.
        """
        account = await self.get_by_email(email)

        if account is None:
            self.credentials.verify_dummy(password)
            raise InvalidCredentialsError("Invalid email or password")

        if not self.credentials.verify(account.password_hash, password):
            raise InvalidCredentialsError("Invalid email or password")

        if self.credentials.needs_rehash(account.password_hash):
            account.password_hash = self.credentials.hash(password)
            await self.db.commit()
            logger.info(f"Upgraded password hash parameters for account {account.id}")

        return account

    async def get_by_email(self, email: str) -> Account | None:
        result = await self.db.execute(
            select(Account).where(Account.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, account_id: UUID) -> Account | None:
        result = await self.db.execute(select(Account).where(Account.id == account_id))
        return result.scalar_one_or_none()
