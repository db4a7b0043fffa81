"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

Provided here:
- DbSession: per-request SQLAlchemy session
- CurrentUser: the user resolved from the "Authorization: Bearer" header
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from bookreview.database import get_db
from bookreview.exceptions import UnauthorizedError
from bookreview.models import User
from bookreview.services import auth as auth_service

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def list_books(db: Session = Depends(get_db)):
#
# You can write:
#   def list_books(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Bearer Token Authentication
# =============================================================================
# auto_error=False so a missing header reaches get_current_user and is
# reported through UnauthorizedError, in the same {"message"} format as an
# invalid token. Adds the "Authorize" button to Swagger UI.

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    db: DbSession,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> User:
    """
    Resolve the bearer token to the authenticated user.

    Args:
        db: Database session
        credentials: Parsed Authorization header, if any

    Returns:
        User the token was issued for

    Raises:
        UnauthorizedError: 401 if the header is missing or the token does
            not verify
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Not authorized, no token")

    return auth_service.verify_token(db, credentials.credentials)


CurrentUser = Annotated[User, Depends(get_current_user)]
