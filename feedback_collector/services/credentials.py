"""One-way hashing and verification of passwords and room secrets.

Account passwords and room secrets share this single primitive: Argon2id
with an embedded random salt, an adaptive work factor and constant-time
comparison. The output is a self-describing PHC string, e.g.
``$argon2id$v=19$m=65536,t=3,p=4$<salt>$<digest>``.
"""

from dataclasses import dataclass

from argon2 import PasswordHasher
from argon2.exceptions import (
    HashingError,
    InvalidHashError,
    VerificationError,
    VerifyMismatchError,
)

from feedback_collector.core.config import Settings


class CredentialError(Exception):
    """Base exception for credential hashing operations."""


class HashFailureError(CredentialError):
    """The hashing backend failed (e.g. memory could not be allocated).

    Indicates an environment problem, not a caller error.
    """


class MalformedHashError(CredentialError):
    """A stored hash is not a valid Argon2 PHC string."""


@dataclass(frozen=True)
class HashingConfig:
    """Argon2id parameters. Defaults: 64 MiB, 3 iterations, 4 lanes."""

    time_cost: int = 3
    memory_cost: int = 65536
    parallelism: int = 4
    hash_len: int = 32
    salt_len: int = 16

    @classmethod
    def from_settings(cls, config: Settings) -> "HashingConfig":
        return cls(
            time_cost=config.password_hash_time_cost,
            memory_cost=config.password_hash_memory_cost,
            parallelism=config.password_hash_parallelism,
        )


class CredentialStore:
    """Hash and verify secrets with a fixed, immutable work factor."""

    def __init__(self, config: HashingConfig | None = None):
        self.config = config or HashingConfig()
        self._hasher = PasswordHasher(
            time_cost=self.config.time_cost,
            memory_cost=self.config.memory_cost,
            parallelism=self.config.parallelism,
            hash_len=self.config.hash_len,
            salt_len=self.config.salt_len,
        )
        # Used to equalize login timing when the email is unknown
        self._dummy_hash = self.hash("feedback-collector-dummy-password")

    def hash(self, password: str) -> str:
        """Hash a password with a fresh random salt."""
        try:
            return self._hasher.hash(password)
        except HashingError as e:
            raise HashFailureError("Password hashing failed") from e

    def verify(self, password_hash: str, candidate: str) -> bool:
        """Check a candidate against a stored hash in constant time.

        Returns False on mismatch; raises MalformedHashError only when the
        stored hash itself cannot be parsed.
        """
        try:
            return self._hasher.verify(password_hash, candidate)
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError) as e:
            raise MalformedHashError("Stored hash is malformed") from e

    def verify_dummy(self, candidate: str) -> None:
        """Spend one verification's worth of time and discard the result."""
        self.verify(self._dummy_hash, candidate)

    def needs_rehash(self, password_hash: str) -> bool:
        """Whether a hash was produced with different parameters than ours."""
        try:
            return self._hasher.check_needs_rehash(password_hash)
        except (InvalidHashError, ValueError) as e:
            raise MalformedHashError("Stored hash is malformed") from e
