"""
BookReview Command Line Client

Each command restores the saved session, performs one action through the
Store and prints the resulting view.

Usage:
    bookreview signup
    bookreview login --email a@x.com
    bookreview books --search dune --genre "Science Fiction" --sort year --page 2
    bookreview show 3
    bookreview add-book
    bookreview review 3 --rating 5 --text "Loved it"
    bookreview delete-book 3
    bookreview profile
    bookreview dark-mode
    bookreview logout
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Optional

import typer

from bookreview.client.api import BookReviewAPI
from bookreview.client.config import get_client_settings
from bookreview.client.render import make_console, render_navbar, render_notification, render_view
from bookreview.client.state import (
    ALL_GENRES,
    GENRES,
    BookForm,
    LoginForm,
    SignupForm,
    SortKey,
    View,
)
from bookreview.client.storage import LocalStorage
from bookreview.client.store import Store

logger = logging.getLogger(__name__)

app = typer.Typer(help="BookReview terminal client", no_args_is_help=True)


def create_store() -> Store:
    """Build a Store wired to the configured API and local storage."""
    settings = get_client_settings()
    storage = LocalStorage(settings.storage_dir)
    return Store(
        lambda token_provider: BookReviewAPI(
            settings.api_url,
            token_provider=token_provider,
            timeout=settings.timeout,
        ),
        storage,
    )


def _show(store: Store) -> None:
    """Print the notification (if any) and the current view."""
    console = make_console(store.state.session.dark_mode)
    notification = store.notification
    if notification is not None:
        console.print(render_notification(notification))
    if store.state.ui.view not in (View.LOGIN, View.SIGNUP):
        console.print(render_navbar(store.state))
    console.print(render_view(store.state))

    if notification is not None and notification.kind == "error":
        raise typer.Exit(code=1)


def _require_login(store: Store) -> None:
    if not store.state.session.is_authenticated:
        make_console(store.state.session.dark_mode).print(
            "[error]Not logged in. Run `bookreview login` first.[/]"
        )
        raise typer.Exit(code=1)


def _run(action: Callable[[Store], Awaitable[None]]) -> None:
    async def runner() -> None:
        async with create_store() as store:
            store.hydrate()
            await action(store)

    asyncio.run(runner())


async def _open_book(store: Store, book_id: int) -> bool:
    """Load the catalog and open book_id in the details view."""
    await store.navigate(View.HOME)
    book = next((b for b in store.state.catalog.books if b.id == book_id), None)
    if book is None:
        store.notify("Book not found.", "error")
        return False
    await store.select_book(book)
    return True


# =============================================================================
# Session commands
# =============================================================================

@app.command()
def signup(
    name: str = typer.Option(..., prompt=True, help="Display name"),
    email: str = typer.Option(..., prompt=True, help="Email address"),
    password: str = typer.Option(
        ..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password"
    ),
) -> None:
    """Create an account and sign in."""
    async def action(store: Store) -> None:
        store.state.ui.view = View.SIGNUP
        store.state.forms.signup = SignupForm(name=name, email=email, password=password)
        await store.signup()
        _show(store)

    _run(action)


@app.command()
def login(
    email: str = typer.Option(..., prompt=True, help="Email address"),
    password: str = typer.Option(..., prompt=True, hide_input=True, help="Password"),
) -> None:
    """Sign in and remember the session."""
    async def action(store: Store) -> None:
        store.state.ui.view = View.LOGIN
        store.state.forms.login = LoginForm(email=email, password=password)
        await store.login()
        _show(store)

    _run(action)


@app.command()
def logout() -> None:
    """Forget the saved session."""
    async def action(store: Store) -> None:
        await store.logout()
        _show(store)

    _run(action)


@app.command("dark-mode")
def dark_mode() -> None:
    """Toggle dark mode."""
    async def action(store: Store) -> None:
        enabled = store.toggle_dark_mode()
        make_console(enabled).print(f"Dark mode {'on' if enabled else 'off'}")

    _run(action)


# =============================================================================
# Catalog commands
# =============================================================================

@app.command()
def books(
    search: str = typer.Option("", "--search", "-s", help="Match title or author"),
    genre: str = typer.Option(ALL_GENRES, "--genre", "-g", help="Genre name or 'All'"),
    sort: SortKey = typer.Option(SortKey.TITLE, "--sort", help="Sort order"),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number"),
) -> None:
    """List books, six per page."""
    if genre != ALL_GENRES and genre not in GENRES:
        raise typer.BadParameter(f"genre must be 'All' or one of: {', '.join(GENRES)}")

    async def action(store: Store) -> None:
        store.set_search(search)
        store.set_genre(genre)
        store.set_sort(sort)
        await store.navigate(View.HOME)
        store.set_page(page)
        _show(store)

    _run(action)


@app.command()
def show(book_id: int = typer.Argument(..., help="Book ID")) -> None:
    """Show a book with its reviews and rating breakdown."""
    async def action(store: Store) -> None:
        await _open_book(store, book_id)
        _show(store)

    _run(action)


@app.command("add-book")
def add_book(
    title: str = typer.Option(..., prompt=True),
    author: str = typer.Option(..., prompt=True),
    description: str = typer.Option(..., prompt=True),
    genre: str = typer.Option("Fiction", prompt=True, help=", ".join(GENRES)),
    year: Optional[int] = typer.Option(None, help="Year published (default: this year)"),
) -> None:
    """Add a book to the catalog."""
    if genre not in GENRES:
        raise typer.BadParameter(f"genre must be one of: {', '.join(GENRES)}")

    async def action(store: Store) -> None:
        _require_login(store)
        form = BookForm(title=title, author=author, description=description, genre=genre)
        if year is not None:
            form.year = year
        store.state.forms.book = form
        await store.navigate(View.ADD_BOOK)
        await store.add_book()
        _show(store)

    _run(action)


@app.command("delete-book")
def delete_book(
    book_id: int = typer.Argument(..., help="Book ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a book you added, with all its reviews."""
    if not yes:
        typer.confirm("Are you sure you want to delete this book and all its reviews?", abort=True)

    async def action(store: Store) -> None:
        _require_login(store)
        await store.delete_book(book_id)
        _show(store)

    _run(action)


@app.command()
def profile() -> None:
    """List the books you added."""
    async def action(store: Store) -> None:
        _require_login(store)
        await store.navigate(View.PROFILE)
        _show(store)

    _run(action)


# =============================================================================
# Review commands
# =============================================================================

@app.command()
def review(
    book_id: int = typer.Argument(..., help="Book ID"),
    rating: int = typer.Option(5, "--rating", "-r", min=1, max=5, help="Stars (1-5)"),
    text: str = typer.Option(..., "--text", "-t", prompt="Review", help="Review text"),
) -> None:
    """Write a review for a book."""
    async def action(store: Store) -> None:
        _require_login(store)
        if await _open_book(store, book_id):
            store.toggle_review_form()
            store.state.forms.review.rating = rating
            store.state.forms.review.review_text = text
            await store.add_review()
        _show(store)

    _run(action)


def main() -> None:
    """Console-script entry point."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s - %(message)s")
    app()


if __name__ == "__main__":
    main()
