"""
Tests for the typer command line client.

create_store is patched to build Stores on the FakeBackend, so every
command runs end to end (hydrate, action, render) without a server.
"""

import pytest
from typer.testing import CliRunner

from bookreview.client import cli
from bookreview.client.models import SessionUser
from bookreview.client.storage import LocalStorage

runner = CliRunner()


@pytest.fixture(autouse=True)
def patched_store(monkeypatch, store_factory):
    monkeypatch.setattr(cli, "create_store", store_factory)


@pytest.fixture
def ana(fake_backend, storage_dir) -> dict:
    """Ana is registered and logged in."""
    user = fake_backend.add_user("Ana", "a@x.com", "pw123456")
    LocalStorage(storage_dir).save_session(SessionUser.model_validate(user))
    return user


class TestSessionCommands:

    def test_login(self, fake_backend, storage_dir):
        fake_backend.add_user("Ana", "a@x.com", "pw123456")

        result = runner.invoke(cli.app, ["login", "--email", "a@x.com", "--password", "pw123456"])

        assert result.exit_code == 0
        assert "Login successful!" in result.output
        assert LocalStorage(storage_dir).load_session().name == "Ana"

    def test_login_prompts(self, fake_backend):
        fake_backend.add_user("Ana", "a@x.com", "pw123456")

        result = runner.invoke(cli.app, ["login"], input="a@x.com\npw123456\n")

        assert result.exit_code == 0
        assert "Login successful!" in result.output

    def test_login_failure(self, fake_backend, storage_dir):
        fake_backend.add_user("Ana", "a@x.com", "pw123456")

        result = runner.invoke(cli.app, ["login", "--email", "a@x.com", "--password", "bad"])

        assert result.exit_code == 1
        assert "Invalid email or password" in result.output
        assert LocalStorage(storage_dir).load_session() is None

    def test_signup(self, storage_dir):
        result = runner.invoke(
            cli.app,
            ["signup", "--name", "Ana", "--email", "a@x.com", "--password", "pw"],
        )

        assert result.exit_code == 0
        assert "Account created successfully!" in result.output
        assert LocalStorage(storage_dir).load_session().email == "a@x.com"

    def test_logout(self, ana, storage_dir):
        result = runner.invoke(cli.app, ["logout"])

        assert result.exit_code == 0
        assert "Logged out successfully" in result.output
        assert LocalStorage(storage_dir).load_session() is None

    def test_dark_mode_toggle(self, storage_dir):
        result = runner.invoke(cli.app, ["dark-mode"])

        assert result.exit_code == 0
        assert "Dark mode on" in result.output
        assert LocalStorage(storage_dir).load_dark_mode() is True

        result = runner.invoke(cli.app, ["dark-mode"])
        assert "Dark mode off" in result.output


class TestCatalogCommands:

    def test_books_is_public(self, fake_backend):
        owner = fake_backend.add_user("Ana", "a@x.com", "pw")
        fake_backend.add_book(owner, "Dune", genre="Science Fiction")

        result = runner.invoke(cli.app, ["books"])

        assert result.exit_code == 0
        assert "Dune" in result.output

    def test_books_filters(self, fake_backend):
        owner = fake_backend.add_user("Ana", "a@x.com", "pw")
        fake_backend.add_book(owner, "Dune", genre="Science Fiction")
        fake_backend.add_book(owner, "Emma", genre="Romance")

        result = runner.invoke(cli.app, ["books", "--genre", "Romance"])

        assert result.exit_code == 0
        assert "Emma" in result.output
        assert "Dune" not in result.output

    def test_books_unknown_genre(self):
        result = runner.invoke(cli.app, ["books", "--genre", "Poetry"])

        assert result.exit_code == 2

    def test_books_empty(self):
        result = runner.invoke(cli.app, ["books", "--search", "nothing"])

        assert result.exit_code == 0
        assert "No books found." in result.output

    def test_show_book(self, fake_backend):
        owner = fake_backend.add_user("Ana", "a@x.com", "pw")
        book = fake_backend.add_book(owner, "Dune")
        fake_backend.add_review(owner, book, 5, "Spice must flow")

        result = runner.invoke(cli.app, ["show", str(book["_id"])])

        assert result.exit_code == 0
        assert "Reviews (1)" in result.output
        assert "Spice must flow" in result.output
        assert "5 Stars" in result.output

    def test_show_unknown_book(self):
        result = runner.invoke(cli.app, ["show", "999"])

        assert result.exit_code == 1
        assert "Book not found." in result.output

    def test_add_book_requires_login(self, fake_backend):
        result = runner.invoke(
            cli.app,
            ["add-book", "--title", "Dune", "--author", "Herbert",
             "--description", "Sand.", "--genre", "Fiction"],
        )

        assert result.exit_code == 1
        assert "Not logged in" in result.output
        assert fake_backend.books == []

    def test_add_book(self, ana, fake_backend):
        result = runner.invoke(
            cli.app,
            ["add-book", "--title", "Dune", "--author", "Herbert",
             "--description", "Sand.", "--genre", "Science Fiction", "--year", "1965"],
        )

        assert result.exit_code == 0
        assert "Book added successfully!" in result.output
        assert fake_backend.books[0]["year"] == 1965
        assert fake_backend.books[0]["addedBy"] == ana["_id"]

    def test_delete_book_confirmed(self, ana, fake_backend):
        book = fake_backend.add_book(ana, "Dune")

        result = runner.invoke(cli.app, ["delete-book", str(book["_id"]), "--yes"])

        assert result.exit_code == 0
        assert "Book deleted successfully!" in result.output
        assert fake_backend.books == []

    def test_delete_book_aborted(self, ana, fake_backend):
        book = fake_backend.add_book(ana, "Dune")

        result = runner.invoke(cli.app, ["delete-book", str(book["_id"])], input="n\n")

        assert result.exit_code == 1
        assert len(fake_backend.books) == 1
        assert fake_backend.requests == []

    def test_delete_book_not_owner(self, ana, fake_backend):
        other = fake_backend.add_user("Ben", "b@x.com", "pw")
        book = fake_backend.add_book(other, "Emma")

        result = runner.invoke(cli.app, ["delete-book", str(book["_id"]), "-y"])

        assert result.exit_code == 1
        assert "User not authorized" in result.output

    def test_profile_lists_own_books(self, ana, fake_backend):
        fake_backend.add_book(ana, "Dune")
        fake_backend.add_book({"_id": 500, "name": "Other"}, "Emma")

        result = runner.invoke(cli.app, ["profile"])

        assert result.exit_code == 0
        assert "Your Books (1)" in result.output
        assert "Dune" in result.output
        assert "Emma" not in result.output

    def test_profile_no_books(self, ana):
        result = runner.invoke(cli.app, ["profile"])

        assert "You haven't added any books yet." in result.output


class TestReviewCommand:

    def test_review(self, ana, fake_backend):
        book = fake_backend.add_book(ana, "Dune")

        result = runner.invoke(
            cli.app, ["review", str(book["_id"]), "--rating", "4", "--text", "Great read"]
        )

        assert result.exit_code == 0
        assert "Review added successfully!" in result.output
        assert fake_backend.reviews[0]["rating"] == 4
        assert fake_backend.reviews[0]["userName"] == "Ana"

    def test_review_rating_out_of_range(self, ana, fake_backend):
        book = fake_backend.add_book(ana, "Dune")

        result = runner.invoke(
            cli.app, ["review", str(book["_id"]), "--rating", "6", "--text", "Too good"]
        )

        assert result.exit_code == 2
        assert fake_backend.reviews == []

    def test_review_requires_login(self, fake_backend):
        owner = fake_backend.add_user("Ana", "a@x.com", "pw")
        book = fake_backend.add_book(owner, "Dune")

        result = runner.invoke(cli.app, ["review", str(book["_id"]), "--text", "Hi"])

        assert result.exit_code == 1
        assert fake_backend.reviews == []
