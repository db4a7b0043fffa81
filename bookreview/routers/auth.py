"""
Authentication Router

Handles user authentication endpoints:
- Signup (name/email/password → user + token)
- Login (email/password → user + token)

Security:
=========
- Passwords are hashed with bcrypt before storage
- Plain text passwords are never logged or stored
- Tokens are signed and expire after settings.token_expire_days
- Both endpoints carry a strict rate limit
"""

import logging

from fastapi import APIRouter, Request, status

from bookreview.config import get_settings
from bookreview.dependencies import DbSession
from bookreview.schemas import AuthResponse, LoginRequest, MessageResponse, SignupRequest
from bookreview.services import auth as auth_service
from bookreview.services.rate_limiter import limiter

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        400: {"model": MessageResponse, "description": "Invalid data or email already registered"},
        401: {"model": MessageResponse, "description": "Invalid email or password"},
    },
)


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    description="Register with name, email and password. Returns the user and a session token.",
)
@limiter.limit(settings.rate_limit_auth)
def signup(
    request: Request,
    user_data: SignupRequest,
    db: DbSession,
) -> AuthResponse:
    """
    Register a new user.

    1. Validates the body (handled by Pydantic)
    2. Rejects an already registered email
    3. Hashes the password and stores the user
    4. Returns the user with a fresh token
    """
    user, token = auth_service.signup(
        db,
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
    )
    return AuthResponse(id=user.id, name=user.name, email=user.email, token=token)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log in with email and password",
    description="""
    Authenticate with email and password.

    **Usage:**
    Include the returned token in the Authorization header:
    ```
    Authorization: Bearer <token>
    ```
    """,
)
@limiter.limit(settings.rate_limit_auth)
def login(
    request: Request,
    credentials: LoginRequest,
    db: DbSession,
) -> AuthResponse:
    """Authenticate a user and return the user with a fresh token."""
    user, token = auth_service.login(
        db,
        email=credentials.email,
        password=credentials.password,
    )
    return AuthResponse(id=user.id, name=user.name, email=user.email, token=token)
