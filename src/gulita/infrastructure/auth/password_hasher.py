"""Password hashing utility using Argon2.

Provides password hashing and verification using Argon2id. The cost
parameters come from settings so deployments can tune them; hashes created
with older parameters are detected by :func:`needs_rehash`.
"""

from functools import lru_cache

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from gulita.core.config import get_settings
from gulita.core.exceptions import ComparisonError, HashingError


@lru_cache
def get_hasher() -> PasswordHasher:
    """Get the process-wide password hasher built from settings."""
    settings = get_settings()
    return PasswordHasher(
        time_cost=settings.password_hash_time_cost,
        memory_cost=settings.password_hash_memory_cost,
        parallelism=settings.password_hash_parallelism,
    )


@lru_cache
def dummy_password_hash() -> str:
    """Hash verified against when a login email is unknown.

    Keeps the unknown-user branch as slow as a real password check.
    """
    return get_hasher().hash("gulita-dummy-password")


def hash_password(password: str) -> str:
    """Hash a password using Argon2id.

    Args:
        password: The plaintext password to hash.

    Returns:
        The hashed password string.

    Raises:
        HashingError: If the password is empty.

    Example:
        >>> hashed = hash_password("password123")
        >>> hashed.startswith("$argon2id$")
        True
    """
    if not password:
        raise HashingError("Password is required for hashing")
    return get_hasher().hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a hash.

    Comparison is constant-time inside argon2.

    Args:
        password: The plaintext password to verify.
        hashed: The hashed password to verify against.

    Returns:
        True if the password matches, False otherwise.

    Raises:
        ComparisonError: If either argument is missing or the hash is malformed.
    """
    if not password or not hashed:
        raise ComparisonError("Password and hash are required for comparison")
    try:
        return get_hasher().verify(hashed, password)
    except VerifyMismatchError:
        return False
    except InvalidHashError as e:
        raise ComparisonError("Stored password hash is malformed") from e
    except VerificationError:
        return False


def needs_rehash(hashed: str) -> bool:
    """Check if a password hash was created with outdated parameters.

    Args:
        hashed: The hashed password to check.

    Returns:
        True if the hash should be updated, False otherwise.
    """
    return get_hasher().check_needs_rehash(hashed)
