"""
Authentication Service

Account creation, credential checks and token resolution.

Security Features:
=================
1. Passwords are hashed with bcrypt before storage
2. Plain passwords are never logged or stored
3. Login always performs a bcrypt comparison, so response time does not
   reveal whether an email is registered
4. Tokens are verified on every protected request and resolved to a live
   user record
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookreview.exceptions import ConflictError, UnauthorizedError
from bookreview.models import User
from bookreview.services.security import (
    create_access_token,
    get_token_user_id,
    hash_password,
    verify_password_or_dummy,
)

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> User | None:
    """Look up a user by exact email."""
    stmt = select(User).where(User.email == email)
    return db.execute(stmt).scalar_one_or_none()


def signup(db: Session, name: str, email: str, password: str) -> tuple[User, str]:
    """
    Register a new user and issue their first session token.

    Args:
        db: Database session
        name: Display name
        email: Login email (must be unused)
        password: Plain text password

    Returns:
        Tuple of (user, token)

    Raises:
        ConflictError: If the email is already registered
    """
    if get_user_by_email(db, email) is not None:
        logger.info(f"Signup rejected, email already registered: {email}")
        raise ConflictError("User already exists")

    user = User(
        name=name,
        email=email,
        hashed_password=hash_password(password),
    )
    # The unique index on users.email catches a concurrent signup that
    # passed the lookup above
    try:
        db.add(user)
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(f"Signup rejected, email registered concurrently: {email}")
        raise ConflictError("User already exists")
    db.refresh(user)

    logger.info(f"New user registered: {user.email}")
    return user, issue_token(user.id)


def login(db: Session, email: str, password: str) -> tuple[User, str]:
    """
    Check credentials and issue a new session token.

    Returns:
        Tuple of (user, token)

    Raises:
        UnauthorizedError: If the email is unknown or the password is wrong.
            Both cases produce the same message.
    """
    user = get_user_by_email(db, email)
    stored_hash = user.hashed_password if user is not None else None

    if not verify_password_or_dummy(password, stored_hash):
        logger.warning(f"Login failed for {email}")
        raise UnauthorizedError("Invalid email or password")

    logger.info(f"User logged in: {user.email}")
    return user, issue_token(user.id)


def issue_token(user_id: int) -> str:
    """Issue a signed session token for user_id."""
    return create_access_token(user_id)


def verify_token(db: Session, token: str) -> User:
    """
    Resolve a bearer token to the user it was issued for.

    Raises:
        UnauthorizedError: If the token is invalid, expired, or names a
            user that no longer exists
    """
    user_id = get_token_user_id(token)
    if user_id is None:
        raise UnauthorizedError("Not authorized, token failed")

    user = db.get(User, user_id)
    if user is None:
        raise UnauthorizedError("Not authorized, token failed")

    return user
