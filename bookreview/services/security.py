"""
Security Service

Handles password hashing and session token operations.

Security Features:
==================
1. Password hashing with bcrypt (passlib), cost factor from settings
2. Signed session tokens (JWT, HS256) carrying {"id": <user id>}
3. Constant-time password verification, including for unknown accounts

Usage:
    from bookreview.services.security import hash_password, verify_password

    hashed = hash_password("pw123456")
    is_valid = verify_password("pw123456", hashed)
"""

import logging
from datetime import UTC, datetime, timedelta
from functools import lru_cache

from jose import JWTError, jwt
from passlib.context import CryptContext

from bookreview.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

# -------------------------------------------------------------------------
# Password Hashing Configuration
# -------------------------------------------------------------------------
# bcrypt__rounds sets the cost factor used for new hashes; existing hashes
# keep the cost they were created with.
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def hash_password(password: str) -> str:
    """
    Hash a plain text password using bcrypt.

    A fresh random salt is generated for every call, so hashing the same
    password twice gives different results.

    Example:
        >>> hashed = hash_password("pw123456")
        >>> hashed.startswith("$2b$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a bcrypt hash.

    passlib compares digests in constant time.

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


@lru_cache
def _dummy_hash() -> str:
    return pwd_context.hash("dummy-password-for-unknown-accounts")


def verify_password_or_dummy(plain_password: str, hashed_password: str | None) -> bool:
    """
    Verify a password even when no account was found.

    When hashed_password is None a comparison is still run against a fixed
    dummy hash and False is returned, so a login for an unknown email costs
    the same bcrypt work as one with a wrong password.

    Args:
        plain_password: Password supplied by the client
        hashed_password: Stored hash, or None if the email is unknown

    Returns:
        True only if an account exists and the password matches
    """
    if hashed_password is None:
        pwd_context.verify(plain_password, _dummy_hash())
        return False
    return verify_password(plain_password, hashed_password)


# -------------------------------------------------------------------------
# Session Tokens
# -------------------------------------------------------------------------

def create_access_token(
    user_id: int,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed session token for a user.

    Args:
        user_id: ID embedded in the token payload as "id"
        expires_delta: Optional custom lifetime (default: token_expire_days)

    Returns:
        Encoded JWT string

    Example:
        >>> token = create_access_token(7)
        >>> token.count(".") == 2  # header.payload.signature
        True
    """
    if expires_delta is None:
        expires_delta = timedelta(days=settings.token_expire_days)

    to_encode = {
        "id": user_id,
        "iat": datetime.now(UTC),
        "exp": datetime.now(UTC) + expires_delta,
    }

    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> dict | None:
    """
    Decode and validate a session token.

    Returns:
        Decoded payload if the signature is valid and the token has not
        expired, None otherwise
    """
    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None


def get_token_user_id(token: str) -> int | None:
    """
    Extract the user id from a session token.

    Returns:
        The embedded user id, or None if the token is invalid, expired or
        carries no usable id
    """
    payload = decode_token(token)
    if payload is None:
        return None

    user_id = payload.get("id")
    if isinstance(user_id, bool) or not isinstance(user_id, (int, str)):
        return None

    try:
        return int(user_id)
    except ValueError:
        return None
