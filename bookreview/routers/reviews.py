"""
Reviews Router

Ledger endpoints, keyed by book:
- GET  /reviews/{book_id}  list a book's reviews (public)
- POST /reviews/{book_id}  review a book (authenticated)

Business Rules:
- Rating must be 1-5
- The book must exist
"""

from fastapi import APIRouter, Request, status

from bookreview.config import get_settings
from bookreview.dependencies import CurrentUser, DbSession
from bookreview.schemas import MessageResponse, ReviewCreate, ReviewResponse
from bookreview.services import ledger
from bookreview.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    prefix="/reviews",
    tags=["Reviews"],
)


@router.get(
    "/{book_id}",
    response_model=list[ReviewResponse],
    summary="List reviews for a book",
)
def list_book_reviews(book_id: int, db: DbSession) -> list[ReviewResponse]:
    """Get all reviews for a book, oldest first. Unknown books give []."""
    reviews = ledger.list_reviews_for_book(db, book_id)
    return [ReviewResponse.model_validate(review) for review in reviews]


@router.post(
    "/{book_id}",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Review a book",
    responses={
        401: {"model": MessageResponse, "description": "Not authenticated"},
        404: {"model": MessageResponse, "description": "Book not found"},
    },
)
@limiter.limit(settings.rate_limit_write)
def create_review(
    request: Request,
    book_id: int,
    review_data: ReviewCreate,
    db: DbSession,
    current_user: CurrentUser,
) -> ReviewResponse:
    """Create a review for a book as the authenticated user."""
    review = ledger.add_review(db, current_user, book_id, review_data)
    return ReviewResponse.model_validate(review)
