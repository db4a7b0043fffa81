"""
Client Store

The Store owns the AppState and is the only thing that changes it.
Views read the state; user actions call Store methods; the methods talk to
the API, update the state and post a notification.

View transitions:

    login/signup --success--> home
    home --select book--> bookDetails --back--> home
    any --add book--> addBook --success--> home
    any --profile--> profile
    any --logout--> login

Entering home or profile reloads the book list. Entering bookDetails with
a selected book loads its reviews; any other view clears them.

State is only changed after a call succeeds. A failed call leaves the
previous state in place and posts an error notification for three seconds.
In-flight requests are never cancelled and are not retried.
"""

import logging
import time
from collections.abc import Callable

from bookreview.client.api import APIError, BookReviewAPI
from bookreview.client.models import BookItem
from bookreview.client.state import (
    ALL_GENRES,
    NOTIFICATION_SECONDS,
    AppState,
    BookForm,
    Notification,
    ReviewForm,
    SortKey,
    View,
    total_pages,
    visible_books,
)
from bookreview.client.storage import LocalStorage

logger = logging.getLogger(__name__)


class Store:
    """
    Holds the client state and performs user actions against the API.

    Args:
        api_factory: Builds the API client, given a callable that returns
            the current token
        storage: Durable storage for the session and dark-mode flag
        clock: Monotonic time source used for notification expiry
    """

    def __init__(
        self,
        api_factory: Callable[[Callable[[], str | None]], BookReviewAPI],
        storage: LocalStorage,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.state = AppState()
        self.storage = storage
        self.clock = clock
        self.api = api_factory(self._current_token)

    async def __aenter__(self) -> "Store":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.api.aclose()

    def _current_token(self) -> str | None:
        user = self.state.session.user
        return user.token if user else None

    # -------------------------------------------------------------------------
    # Startup
    # -------------------------------------------------------------------------
    def hydrate(self) -> None:
        """Restore the persisted session and dark-mode preference."""
        user = self.storage.load_session()
        if user is not None:
            self.state.session.user = user
            self.state.ui.view = View.HOME
        self.state.session.dark_mode = self.storage.load_dark_mode()

    # -------------------------------------------------------------------------
    # Notifications
    # -------------------------------------------------------------------------
    def notify(self, message: str, kind: str) -> None:
        self.state.ui.notification = Notification(
            message=message,
            kind=kind,
            expires_at=self.clock() + NOTIFICATION_SECONDS,
        )

    @property
    def notification(self) -> Notification | None:
        """The current notification, or None once it has expired."""
        notification = self.state.ui.notification
        if notification is not None and self.clock() >= notification.expires_at:
            self.state.ui.notification = None
            return None
        return notification

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------
    async def navigate(self, view: View) -> None:
        """Switch view and run its on-enter loads."""
        self.state.ui.view = view
        await self._on_view_change()

    async def select_book(self, book: BookItem) -> None:
        self.state.ui.selected_book = book
        self.state.ui.show_review_form = False
        await self.navigate(View.BOOK_DETAILS)

    async def back_to_books(self) -> None:
        self.state.ui.selected_book = None
        await self.navigate(View.HOME)

    async def _on_view_change(self) -> None:
        view = self.state.ui.view
        if view in (View.HOME, View.PROFILE):
            await self.fetch_books()

        selected = self.state.ui.selected_book
        if view == View.BOOK_DETAILS and selected is not None:
            await self.fetch_reviews(selected.id)
        else:
            self.state.catalog.reviews = []

    # -------------------------------------------------------------------------
    # Loads
    # -------------------------------------------------------------------------
    async def fetch_books(self) -> None:
        try:
            self.state.catalog.books = await self.api.list_books()
        except APIError:
            self.notify("Could not fetch books.", "error")

    async def fetch_reviews(self, book_id: int) -> None:
        try:
            self.state.catalog.reviews = await self.api.list_reviews(book_id)
        except APIError:
            self.notify("Could not fetch reviews.", "error")

    # -------------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------------
    async def login(self) -> bool:
        form = self.state.forms.login
        try:
            user = await self.api.login(form.email, form.password)
        except APIError as e:
            self.notify(e.message, "error")
            return False

        self.storage.save_session(user)
        self.state.session.user = user
        self.state.forms.login.password = ""
        await self.navigate(View.HOME)
        self.notify("Login successful!", "success")
        return True

    async def signup(self) -> bool:
        form = self.state.forms.signup
        try:
            user = await self.api.signup(form.name, form.email, form.password)
        except APIError as e:
            self.notify(e.message, "error")
            return False

        self.storage.save_session(user)
        self.state.session.user = user
        self.state.forms.signup.password = ""
        await self.navigate(View.HOME)
        self.notify("Account created successfully!", "success")
        return True

    async def logout(self) -> None:
        self.storage.clear_session()
        self.state.session.user = None
        self.state.ui.selected_book = None
        await self.navigate(View.LOGIN)
        self.notify("Logged out successfully", "success")

    def toggle_dark_mode(self) -> bool:
        self.state.session.dark_mode = not self.state.session.dark_mode
        self.storage.save_dark_mode(self.state.session.dark_mode)
        return self.state.session.dark_mode

    # -------------------------------------------------------------------------
    # Books
    # -------------------------------------------------------------------------
    async def add_book(self) -> bool:
        form = self.state.forms.book
        if not form.title.strip() or not form.author.strip() or not form.description.strip():
            self.notify("Please fill all fields", "error")
            return False

        try:
            await self.api.add_book(
                title=form.title,
                author=form.author,
                description=form.description,
                genre=form.genre,
                year=form.year,
            )
        except APIError as e:
            self.notify(e.message, "error")
            return False

        self.state.forms.book = BookForm()
        await self.navigate(View.HOME)
        self.notify("Book added successfully!", "success")
        return True

    async def delete_book(self, book_id: int) -> bool:
        """Delete a book; callers confirm with the user first."""
        try:
            await self.api.delete_book(book_id)
        except APIError as e:
            self.notify(e.message, "error")
            return False

        self.state.ui.selected_book = None
        await self.navigate(View.HOME)
        self.notify("Book deleted successfully!", "success")
        return True

    def can_delete(self, book: BookItem) -> bool:
        user = self.state.session.user
        return user is not None and book.added_by == user.id

    # -------------------------------------------------------------------------
    # Reviews
    # -------------------------------------------------------------------------
    def toggle_review_form(self) -> None:
        self.state.ui.show_review_form = not self.state.ui.show_review_form

    async def add_review(self) -> bool:
        book = self.state.ui.selected_book
        if book is None:
            return False

        form = self.state.forms.review
        if not form.review_text.strip():
            self.notify("Review text cannot be empty", "error")
            return False

        try:
            await self.api.add_review(book.id, form.rating, form.review_text)
        except APIError as e:
            self.notify(e.message, "error")
            return False

        await self.fetch_reviews(book.id)
        self.state.forms.review = ReviewForm()
        self.state.ui.show_review_form = False
        self.notify("Review added successfully!", "success")
        return True

    # -------------------------------------------------------------------------
    # Filters and pagination
    # -------------------------------------------------------------------------
    def set_search(self, term: str) -> None:
        self.state.filters.search_term = term
        self.state.filters.page = 1

    def set_genre(self, genre: str) -> None:
        self.state.filters.genre = genre or ALL_GENRES
        self.state.filters.page = 1

    def set_sort(self, sort_by: SortKey) -> None:
        self.state.filters.sort_by = sort_by

    @property
    def total_pages(self) -> int:
        return total_pages(len(visible_books(self.state)))

    def set_page(self, page: int) -> None:
        """Jump to page, clamped to the available pages."""
        self.state.filters.page = max(1, min(page, max(1, self.total_pages)))

    def next_page(self) -> None:
        self.set_page(self.state.filters.page + 1)

    def prev_page(self) -> None:
        self.set_page(self.state.filters.page - 1)
