"""
User and Authentication Pydantic Schemas

Schemas:
- SignupRequest: name, email, password
- LoginRequest: email, password
- AuthResponse: the user record plus a session token
- MessageResponse: plain {"message": ...} confirmation body

Security:
- Passwords are accepted on input only; no response schema has a password
  or hash field.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class SignupRequest(BaseModel):
    """
    Schema for creating an account.

    Example request body:
    {
        "name": "Ana",
        "email": "a@x.com",
        "password": "pw123456"
    }
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Display name shown on books and reviews",
        examples=["Ana"],
    )

    email: EmailStr = Field(
        ...,
        description="Email address used to log in",
        examples=["a@x.com"],
    )

    password: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Plain text password (hashed before storage)",
        examples=["pw123456"],
    )

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        """Validate and normalize name."""
        if not v.strip():
            raise ValueError("Name cannot be empty or whitespace")
        return v.strip()


class LoginRequest(BaseModel):
    """Schema for logging in with email and password."""

    email: EmailStr = Field(..., description="Registered email address")
    password: str = Field(..., min_length=1, description="Account password")


class AuthResponse(BaseModel):
    """
    Returned by both signup and login.

    The client persists this object verbatim as its session, so the keys
    match what it stores: {_id, name, email, token}.
    """

    id: int = Field(..., alias="_id", description="User ID")
    name: str = Field(..., description="Display name")
    email: EmailStr = Field(..., description="Email address")
    token: str = Field(..., description="Bearer token for protected endpoints")

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "_id": 1,
                "name": "Ana",
                "email": "a@x.com",
                "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
            }
        },
    )


class MessageResponse(BaseModel):
    """Confirmation or error body: {"message": "..."}."""

    message: str = Field(..., examples=["Book removed"])
