"""
Client Views

rich renderables for each client view. Nothing here touches the network
or changes state; every function takes the AppState (or part of it) and
returns something a rich Console can print.
"""

from rich import box
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from bookreview.client.state import (
    ALL_GENRES,
    AppState,
    Notification,
    View,
    average_rating,
    current_page_books,
    owned_books,
    rating_distribution,
    star_string,
    total_pages,
    visible_books,
)

LIGHT_THEME = Theme({
    "brand": "bold blue",
    "muted": "grey50",
    "star": "yellow",
    "success": "bold green",
    "error": "bold red",
    "owner": "red",
})

DARK_THEME = Theme({
    "brand": "bold bright_cyan",
    "muted": "grey70",
    "star": "bright_yellow",
    "success": "bold bright_green",
    "error": "bold bright_red",
    "owner": "bright_red",
})


def make_console(dark_mode: bool, **kwargs) -> Console:
    return Console(theme=DARK_THEME if dark_mode else LIGHT_THEME, **kwargs)


def render_notification(notification: Notification) -> Panel:
    style = "success" if notification.kind == "success" else "error"
    return Panel(Text(notification.message, style=style), border_style=style, expand=False)


def render_navbar(state: AppState) -> Text:
    text = Text("📚 BookReview", style="brand")
    if state.session.user is not None:
        text.append(f"   {state.session.user.name}", style="muted")
    text.append("   🌙" if state.session.dark_mode else "   ☀", style="muted")
    return text


def render_login() -> Panel:
    body = Text.assemble(
        ("Welcome Back\n", "brand"),
        ("Sign in with: bookreview login\n", ""),
        ("Don't have an account? bookreview signup", "muted"),
    )
    return Panel(body, title="Login", expand=False)


def render_signup() -> Panel:
    body = Text.assemble(
        ("Create Account\n", "brand"),
        ("Register with: bookreview signup\n", ""),
        ("Already have an account? bookreview login", "muted"),
    )
    return Panel(body, title="Sign Up", expand=False)


def _books_table(state: AppState, books, title: str) -> Table:
    user = state.session.user
    table = Table(title=title, box=box.ROUNDED, header_style="brand", show_lines=False)
    table.add_column("ID", justify="right", style="muted", no_wrap=True)
    table.add_column("Title")
    table.add_column("Author")
    table.add_column("Genre")
    table.add_column("Year", justify="right")
    table.add_column("Rating", style="star", no_wrap=True)
    table.add_column("", no_wrap=True)

    for book in books:
        owner_mark = Text("yours", style="owner") if user is not None and book.added_by == user.id else ""
        table.add_row(
            str(book.id),
            book.title,
            book.author,
            book.genre,
            str(book.year),
            star_string(average_rating(state.catalog.reviews, book.id)),
            owner_mark,
        )
    return table


def render_home(state: AppState) -> RenderableType:
    """The "Discover Books" list for the current filters and page."""
    filters = state.filters
    matching = visible_books(state)
    pages = total_pages(len(matching))

    summary = Text(f"{len(matching)} book(s)", style="muted")
    if filters.search_term:
        summary.append(f" matching '{filters.search_term}'", style="muted")
    if filters.genre != ALL_GENRES:
        summary.append(f" in {filters.genre}", style="muted")
    summary.append(f", sorted by {filters.sort_by.value}", style="muted")

    parts: list[RenderableType] = [summary]
    page_books = current_page_books(state)
    if page_books:
        parts.append(_books_table(state, page_books, "Discover Books"))
    else:
        parts.append(Text("No books found.", style="muted"))

    if pages > 1:
        parts.append(Text(f"Page {filters.page} of {pages}", style="muted"))

    return Group(*parts)


def render_histogram(state: AppState, book_id: int) -> Table:
    table = Table(box=None, show_header=False, padding=(0, 1))
    table.add_column(justify="right", style="muted")
    table.add_column(style="star")
    table.add_column(justify="right")
    for label, count in rating_distribution(state.catalog.reviews, book_id):
        table.add_row(label, "█" * count, str(count))
    return table


def render_book_details(state: AppState) -> RenderableType:
    book = state.ui.selected_book
    if book is None:
        return Text("Book not found.", style="error")

    reviews = state.catalog.reviews
    average = average_rating(reviews, book.id)

    header = Text.assemble(
        (book.title, "brand"),
        ("\nby ", "muted"),
        (book.author, ""),
        (f" | {book.year} | {book.genre}", "muted"),
        (f"\nAdded by {book.added_by_name}", "muted"),
        ("\n\n", ""),
        (book.description, ""),
    )

    review_header = Text(f"Reviews ({len(reviews)}) ", style="brand")
    review_header.append(star_string(average), style="star")
    if reviews:
        review_header.append(f" {average:.1f}", style="muted")

    parts: list[RenderableType] = [
        Panel(header, expand=True),
        review_header,
        render_histogram(state, book.id),
    ]

    if not reviews:
        parts.append(Text("No reviews yet for this book.", style="muted"))
    for review in reviews:
        body = Text.assemble(
            (review.user_name, "bold"),
            ("  ", ""),
            (star_string(review.rating), "star"),
            ("\n", ""),
            (review.review_text, ""),
            (f"\n{review.created_at.date().isoformat()}", "muted"),
        )
        parts.append(Panel(body, box=box.SIMPLE))

    return Group(*parts)


def render_add_book(state: AppState) -> Panel:
    form = state.forms.book
    table = Table(box=None, show_header=False)
    table.add_column(style="muted")
    table.add_column()
    table.add_row("Title", form.title)
    table.add_row("Author", form.author)
    table.add_row("Description", form.description)
    table.add_row("Genre", form.genre)
    table.add_row("Year Published", str(form.year))
    return Panel(table, title="Add a New Book", expand=False)


def render_profile(state: AppState) -> RenderableType:
    user = state.session.user
    if user is None:
        return render_login()

    mine = owned_books(state.catalog.books, user.id)
    heading = Text.assemble((user.name, "brand"), (f"  <{user.email}>", "muted"))
    if not mine:
        return Group(heading, Text("You haven't added any books yet.", style="muted"))
    return Group(heading, _books_table(state, mine, f"Your Books ({len(mine)})"))


def render_view(state: AppState) -> RenderableType:
    view = state.ui.view
    if view == View.LOGIN:
        return render_login()
    if view == View.SIGNUP:
        return render_signup()
    if view == View.HOME:
        return render_home(state)
    if view == View.BOOK_DETAILS:
        return render_book_details(state)
    if view == View.ADD_BOOK:
        return render_add_book(state)
    if view == View.PROFILE:
        return render_profile(state)
    return Text("Loading...")
