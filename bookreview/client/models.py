"""
Client Wire Models

Typed views of the JSON the API returns. Field aliases match the wire
keys ("_id", "addedBy", ...), so payloads can be validated as-is and dumped
back with by_alias=True for storage.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SessionUser(BaseModel):
    """Signed-in user as persisted in local storage: {_id, name, email, token}."""

    id: int = Field(..., alias="_id")
    name: str
    email: str
    token: str

    model_config = ConfigDict(populate_by_name=True)


class BookItem(BaseModel):
    id: int = Field(..., alias="_id")
    title: str
    author: str
    description: str
    genre: str
    year: int
    added_by: int = Field(..., alias="addedBy")
    added_by_name: str = Field(..., alias="addedByName")

    model_config = ConfigDict(populate_by_name=True)


class ReviewItem(BaseModel):
    id: int = Field(..., alias="_id")
    book_id: int = Field(..., alias="bookId")
    user_id: int = Field(..., alias="userId")
    user_name: str = Field(..., alias="userName")
    rating: int
    review_text: str = Field(..., alias="reviewText")
    created_at: datetime = Field(..., alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)
