"""
Book Pydantic Schemas

- BookCreate: request body for POST /books
- BookResponse: a catalog entry as returned to clients

Response keys are camelCase ("addedBy", "addedByName") and the primary key
is exposed as "_id"; aliases map them onto the snake_case
model attributes.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bookreview.models.book import Genre


class BookCreate(BaseModel):
    """
    Schema for adding a book to the catalog.

    Example request body:
    {
        "title": "Dune",
        "author": "Frank Herbert",
        "description": "Politics and ecology on a desert planet.",
        "genre": "Science Fiction",
        "year": 1965
    }
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Book title",
        examples=["Dune"],
    )

    author: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Author name",
        examples=["Frank Herbert"],
    )

    description: str = Field(
        ...,
        min_length=1,
        max_length=5000,
        description="Book description or summary",
    )

    genre: Genre = Field(
        ...,
        description="One of the fixed catalog genres",
        examples=["Science Fiction"],
    )

    year: int = Field(
        ...,
        description="Publication year",
        examples=[1965],
    )

    @field_validator("title", "author", "description")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        """Required text fields cannot be whitespace only."""
        if not v.strip():
            raise ValueError("Field cannot be empty or whitespace")
        return v.strip()


class BookResponse(BaseModel):
    """Schema for book responses."""

    id: int = Field(..., alias="_id", description="Book ID")
    title: str
    author: str
    description: str
    genre: str
    year: int
    added_by: int = Field(
        ...,
        alias="addedBy",
        description="ID of the user who added the book",
    )
    added_by_name: str = Field(
        ...,
        alias="addedByName",
        description="Display name of the user who added the book",
    )

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "_id": 42,
                "title": "Dune",
                "author": "Frank Herbert",
                "description": "Politics and ecology on a desert planet.",
                "genre": "Science Fiction",
                "year": 1965,
                "addedBy": 7,
                "addedByName": "Ana",
            }
        },
    )
