"""
Review Pydantic Schemas

Business Rules:
- Rating must be 1-5 (validated at schema level)
- Review text is required
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReviewCreate(BaseModel):
    """
    Schema for creating a new review.

    Example request body:
    {
        "rating": 5,
        "reviewText": "One of the best books I've ever read."
    }
    """

    rating: int = Field(
        ...,
        ge=1,
        le=5,
        description="Rating from 1 to 5 stars",
        examples=[4, 5],
    )

    review_text: str = Field(
        ...,
        alias="reviewText",
        min_length=1,
        max_length=5000,
        description="Review text content",
        examples=["This book changed my perspective on..."],
    )

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("review_text")
    @classmethod
    def review_text_must_not_be_blank(cls, v: str) -> str:
        """Validate review text is not just whitespace."""
        if not v.strip():
            raise ValueError("Review text cannot be empty or whitespace")
        return v.strip()


class ReviewResponse(BaseModel):
    """Schema for review responses."""

    id: int = Field(..., alias="_id", description="Review ID")
    book_id: int = Field(..., alias="bookId")
    user_id: int = Field(..., alias="userId")
    user_name: str = Field(..., alias="userName")
    rating: int = Field(..., ge=1, le=5)
    review_text: str = Field(..., alias="reviewText")
    created_at: datetime = Field(..., alias="createdAt")

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "_id": 1,
                "bookId": 42,
                "userId": 7,
                "userName": "Ana",
                "rating": 5,
                "reviewText": "A must-read classic!",
                "createdAt": "2024-01-15T10:30:00Z",
            }
        },
    )
