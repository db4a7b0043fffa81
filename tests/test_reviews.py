"""
Tests for Reviews

Covers /api/reviews/{book_id}:
- GET: public list for one book, oldest first
- POST: add a review (authenticated)

Business Rules:
- Rating must be 1-5
- The book must exist
"""

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bookreview.models import Book, Review, User
from bookreview.services.security import create_access_token


def get_auth_header(user: User) -> dict:
    """Create authorization header for a user."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


# =============================================================================
# List Reviews for Book
# =============================================================================


class TestListBookReviews:
    """Tests for GET /api/reviews/{book_id}"""

    def test_list_reviews_empty(self, client: TestClient, sample_book: Book):
        response = client.get(f"/api/reviews/{sample_book.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == []

    def test_list_reviews_with_data(
        self, client: TestClient, sample_review: Review, second_user: User
    ):
        response = client.get(f"/api/reviews/{sample_review.book_id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert len(data) == 1
        review = data[0]
        assert review["_id"] == sample_review.id
        assert review["bookId"] == sample_review.book_id
        assert review["userId"] == second_user.id
        assert review["userName"] == "Second User"
        assert review["rating"] == 4
        assert review["reviewText"] == "I really enjoyed reading this book."
        assert review["createdAt"]

    def test_list_reviews_unknown_book(self, client: TestClient):
        """An unknown book id gives an empty list, not an error."""
        response = client.get("/api/reviews/99999")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == []

    def test_list_reviews_insertion_order(
        self, client: TestClient, sample_book: Book, sample_user: User, second_user: User
    ):
        for user, rating in [(second_user, 5), (sample_user, 2), (second_user, 3)]:
            client.post(
                f"/api/reviews/{sample_book.id}",
                json={"rating": rating, "reviewText": f"{rating} stars"},
                headers=get_auth_header(user),
            )

        data = client.get(f"/api/reviews/{sample_book.id}").json()

        assert [r["rating"] for r in data] == [5, 2, 3]
        ids = [r["_id"] for r in data]
        assert ids == sorted(ids)

    def test_list_reviews_only_for_book(
        self, client: TestClient, db_session: Session, sample_review: Review, sample_user: User
    ):
        other = Book(
            title="Other",
            author="Someone",
            description="Another book.",
            genre="History",
            year=2010,
            added_by=sample_user.id,
            added_by_name=sample_user.name,
        )
        db_session.add(other)
        db_session.commit()

        assert client.get(f"/api/reviews/{other.id}").json() == []


# =============================================================================
# Create Review
# =============================================================================


class TestCreateReview:
    """Tests for POST /api/reviews/{book_id}"""

    def test_create_review_success(
        self, client: TestClient, sample_book: Book, second_user: User
    ):
        response = client.post(
            f"/api/reviews/{sample_book.id}",
            json={"rating": 5, "reviewText": "Loved it"},
            headers=get_auth_header(second_user),
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["bookId"] == sample_book.id
        assert data["userId"] == second_user.id
        assert data["userName"] == second_user.name
        assert data["rating"] == 5
        assert data["reviewText"] == "Loved it"

    def test_owner_can_review_own_book(
        self, client: TestClient, sample_book: Book, sample_user: User
    ):
        response = client.post(
            f"/api/reviews/{sample_book.id}",
            json={"rating": 3, "reviewText": "My own book, but honest"},
            headers=get_auth_header(sample_user),
        )

        assert response.status_code == status.HTTP_201_CREATED

    def test_user_can_review_twice(
        self, client: TestClient, sample_review: Review, second_user: User
    ):
        response = client.post(
            f"/api/reviews/{sample_review.book_id}",
            json={"rating": 1, "reviewText": "Changed my mind"},
            headers=get_auth_header(second_user),
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert len(client.get(f"/api/reviews/{sample_review.book_id}").json()) == 2

    def test_create_review_unauthenticated(self, client: TestClient, sample_book: Book):
        response = client.post(
            f"/api/reviews/{sample_book.id}",
            json={"rating": 5, "reviewText": "Loved it"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_create_review_book_not_found(
        self, client: TestClient, db_session: Session, sample_user: User
    ):
        """Reviewing a missing book is 404 and stores nothing."""
        response = client.post(
            "/api/reviews/99999",
            json={"rating": 5, "reviewText": "Ghost book"},
            headers=get_auth_header(sample_user),
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"message": "Book not found"}
        assert db_session.execute(select(func.count()).select_from(Review)).scalar_one() == 0

    @pytest.mark.parametrize("rating", [0, 6, -1])
    def test_create_review_rating_out_of_range(
        self, client: TestClient, sample_book: Book, sample_user: User, rating: int
    ):
        response = client.post(
            f"/api/reviews/{sample_book.id}",
            json={"rating": rating, "reviewText": "Out of range"},
            headers=get_auth_header(sample_user),
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "rating" in response.json()["message"]

    def test_create_review_blank_text(
        self, client: TestClient, sample_book: Book, sample_user: User
    ):
        response = client.post(
            f"/api/reviews/{sample_book.id}",
            json={"rating": 4, "reviewText": "   "},
            headers=get_auth_header(sample_user),
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_review_missing_text(
        self, client: TestClient, sample_book: Book, sample_user: User
    ):
        response = client.post(
            f"/api/reviews/{sample_book.id}",
            json={"rating": 4},
            headers=get_auth_header(sample_user),
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "reviewText" in response.json()["message"]
