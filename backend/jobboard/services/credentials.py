"""
Password hashing.

The password is first keyed with the server-wide secret (HMAC-SHA256,
a "pepper"), then hashed with Argon2id. A leaked database alone is not
enough to run an offline guessing attack without HASH_SECRET.
"""
import hashlib
import hmac
import logging
import secrets
from functools import lru_cache
from typing import Optional

from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHashError, VerificationError

from jobboard.config import settings
from jobboard.errors import ConfigurationError

logger = logging.getLogger(__name__)


def _require_secret(secret: Optional[str]) -> str:
    secret = secret if secret is not None else settings.hash_secret
    if not secret:
        logger.error("HASH_SECRET is not configured; refusing to hash or verify passwords")
        raise ConfigurationError()
    return secret


def _hasher() -> PasswordHasher:
    # Built per call so parameter changes in settings take effect immediately
    return PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
        hash_len=settings.argon2_hash_len,
        type=Type.ID,
    )


def _keyed(password: str, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), password.encode("utf-8"), hashlib.sha256).hexdigest()


def hash_password(password: str, secret: Optional[str] = None) -> str:
    """
    Hash a password for storage.

    Args:
        password: Plain-text password
        secret: Server secret; defaults to settings.hash_secret

    Returns:
        Encoded Argon2id hash (parameters and salt embedded)

    Raises:
        ConfigurationError: If no secret is configured
    """
    secret = _require_secret(secret)
    return _hasher().hash(_keyed(password, secret))


def verify_password(password: str, password_hash: str, secret: Optional[str] = None) -> bool:
    """
    Check a password against a stored hash.

    Returns False on mismatch or on a malformed hash.

    Raises:
        ConfigurationError: If no secret is configured
    """
    secret = _require_secret(secret)
    try:
        return _hasher().verify(password_hash, _keyed(password, secret))
    except VerificationError:
        return False
    except InvalidHashError:
        logger.warning("Stored password hash is not a valid Argon2 hash")
        return False


@lru_cache(maxsize=4)
def _dummy_hash(time_cost: int, memory_cost: int, parallelism: int, hash_len: int) -> str:
    return _hasher().hash(secrets.token_hex(16))


def verify_against_dummy(password: str, secret: Optional[str] = None) -> bool:
    """
    Spend the same Argon2 work as a real verification and return False.

    Used when no account matches the email so that unknown emails and
    wrong passwords take the same time.
    """
    dummy = _dummy_hash(
        settings.argon2_time_cost,
        settings.argon2_memory_cost,
        settings.argon2_parallelism,
        settings.argon2_hash_len,
    )
    verify_password(password, dummy, secret)
    return False
