"""
Client Application State

The whole client state is one AppState, split by concern:

- SessionState: who is signed in, and the dark-mode preference
- CatalogState: books and the reviews of the open book
- FilterState: search term, genre filter, sort key, current page
- FormState: buffers for the login, signup, book and review forms
- UIState: current view, selected book, review form toggle, notification

Only the Store mutates it. Everything else in this module is a pure
selector over the state: filtering, sorting, pagination and the per-book
rating aggregates.

Rating aggregates are computed from the reviews currently loaded, which
are only ever those of the open book. They are not a catalog-wide average.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from bookreview.client.models import BookItem, ReviewItem, SessionUser

PAGE_SIZE = 6
ALL_GENRES = "All"
NOTIFICATION_SECONDS = 3.0

GENRES: list[str] = [
    "Fiction",
    "Non-Fiction",
    "Science Fiction",
    "Mystery",
    "Romance",
    "Thriller",
    "Biography",
    "History",
    "Self-Help",
    "Fantasy",
]


class View(str, Enum):
    LOGIN = "login"
    SIGNUP = "signup"
    HOME = "home"
    BOOK_DETAILS = "bookDetails"
    ADD_BOOK = "addBook"
    PROFILE = "profile"


class SortKey(str, Enum):
    TITLE = "title"
    YEAR = "year"
    # Needs every book's reviews; accepted but leaves the order unchanged
    RATING = "rating"


# =============================================================================
# State slices
# =============================================================================

@dataclass
class SessionState:
    user: SessionUser | None = None
    dark_mode: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


@dataclass
class CatalogState:
    books: list[BookItem] = field(default_factory=list)
    reviews: list[ReviewItem] = field(default_factory=list)


@dataclass
class FilterState:
    search_term: str = ""
    genre: str = ALL_GENRES
    sort_by: SortKey = SortKey.TITLE
    page: int = 1


@dataclass
class LoginForm:
    email: str = ""
    password: str = ""


@dataclass
class SignupForm:
    name: str = ""
    email: str = ""
    password: str = ""


@dataclass
class BookForm:
    title: str = ""
    author: str = ""
    description: str = ""
    genre: str = "Fiction"
    year: int = field(default_factory=lambda: date.today().year)


@dataclass
class ReviewForm:
    rating: int = 5
    review_text: str = ""


@dataclass
class FormState:
    login: LoginForm = field(default_factory=LoginForm)
    signup: SignupForm = field(default_factory=SignupForm)
    book: BookForm = field(default_factory=BookForm)
    review: ReviewForm = field(default_factory=ReviewForm)


@dataclass
class Notification:
    message: str
    kind: str  # "success" or "error"
    expires_at: float


@dataclass
class UIState:
    view: View = View.LOGIN
    selected_book: BookItem | None = None
    show_review_form: bool = False
    notification: Notification | None = None


@dataclass
class AppState:
    session: SessionState = field(default_factory=SessionState)
    catalog: CatalogState = field(default_factory=CatalogState)
    filters: FilterState = field(default_factory=FilterState)
    forms: FormState = field(default_factory=FormState)
    ui: UIState = field(default_factory=UIState)


# =============================================================================
# Selectors
# =============================================================================

def filter_books(books: list[BookItem], search_term: str, genre: str) -> list[BookItem]:
    """
    Keep books whose title or author contains search_term (case-insensitive)
    and whose genre matches. The "All" genre matches every book.
    """
    term = search_term.lower()
    return [
        book
        for book in books
        if (term in book.title.lower() or term in book.author.lower())
        and (genre == ALL_GENRES or book.genre == genre)
    ]


def sort_books(books: list[BookItem], sort_by: SortKey) -> list[BookItem]:
    """Title A-Z, or newest year first. Sorting by rating keeps the order."""
    if sort_by == SortKey.TITLE:
        return sorted(books, key=lambda book: book.title.casefold())
    if sort_by == SortKey.YEAR:
        return sorted(books, key=lambda book: book.year, reverse=True)
    return list(books)


def total_pages(count: int, page_size: int = PAGE_SIZE) -> int:
    return math.ceil(count / page_size)


def paginate(books: list[BookItem], page: int, page_size: int = PAGE_SIZE) -> list[BookItem]:
    """Slice out 1-indexed page `page`."""
    start = (page - 1) * page_size
    return books[start:start + page_size]


def visible_books(state: AppState) -> list[BookItem]:
    """Filtered and sorted books, before pagination."""
    filtered = filter_books(state.catalog.books, state.filters.search_term, state.filters.genre)
    return sort_books(filtered, state.filters.sort_by)


def current_page_books(state: AppState) -> list[BookItem]:
    return paginate(visible_books(state), state.filters.page)


def owned_books(books: list[BookItem], user_id: int) -> list[BookItem]:
    return [book for book in books if book.added_by == user_id]


def average_rating(reviews: list[ReviewItem], book_id: int) -> float:
    """Mean rating of the loaded reviews for book_id; 0 when there are none."""
    ratings = [review.rating for review in reviews if review.book_id == book_id]
    if not ratings:
        return 0.0
    return sum(ratings) / len(ratings)


def rating_distribution(reviews: list[ReviewItem], book_id: int) -> list[tuple[str, int]]:
    """
    Histogram of loaded reviews for book_id, one bucket per star.

    Example:
        [("1 Star", 0), ("2 Stars", 1), ("3 Stars", 0), ("4 Stars", 2), ("5 Stars", 3)]
    """
    return [
        (
            f"{stars} Star{'s' if stars > 1 else ''}",
            sum(1 for review in reviews if review.book_id == book_id and review.rating == stars),
        )
        for stars in range(1, 6)
    ]


def star_string(rating: float) -> str:
    """Five stars, filled for every whole star the rating reaches."""
    return "".join("★" if star <= rating else "☆" for star in range(1, 6))
