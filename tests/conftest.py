"""
pytest Fixtures for BookReview Tests

Shared fixtures used across all test files.

Server fixtures:
- engine / db_session: SQLite in-memory database, one rolled-back
  transaction per test
- client: FastAPI TestClient with get_db overridden to db_session
- sample_user, second_user, sample_book, sample_review: seeded records

Client fixtures:
- fake_backend: an in-memory stand-in for the REST API, served to httpx
  through MockTransport
- store_factory: builds a client Store wired to fake_backend
- clock: a manually advanced clock for notification expiry

FIXTURE SCOPES:
- session scope for engine (expensive to create)
- function scope for everything else (isolation between tests)
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"

import json
from collections.abc import Generator

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookreview.client.api import BookReviewAPI
from bookreview.client.storage import LocalStorage
from bookreview.client.store import Store
from bookreview.database import Base, get_db
from bookreview.main import app
from bookreview.models import Book, Genre, Review, User
from bookreview.services.security import hash_password

# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture(scope="session")
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps a single connection alive for the whole session;
    without it the in-memory database would vanish between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    The session is bound to a connection whose outer transaction is rolled
    back afterwards, so commits made by services never leak between tests.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Test client whose requests use the test database session."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

@pytest.fixture
def sample_user(db_session: Session) -> User:
    """Create a sample user for testing."""
    user = User(
        name="Test User",
        email="testuser@example.com",
        hashed_password=hash_password("SecurePass123"),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def second_user(db_session: Session) -> User:
    """Create a second user for testing ownership scenarios."""
    user = User(
        name="Second User",
        email="seconduser@example.com",
        hashed_password=hash_password("SecurePass456"),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def sample_book(db_session: Session, sample_user: User) -> Book:
    """A book added by sample_user."""
    book = Book(
        title="1984",
        author="George Orwell",
        description="A dystopian novel set in a totalitarian society.",
        genre=Genre.FICTION.value,
        year=1949,
        added_by=sample_user.id,
        added_by_name=sample_user.name,
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def sample_review(db_session: Session, sample_book: Book, second_user: User) -> Review:
    """A review of sample_book written by second_user."""
    review = Review(
        book_id=sample_book.id,
        user_id=second_user.id,
        user_name=second_user.name,
        rating=4,
        review_text="I really enjoyed reading this book.",
    )
    db_session.add(review)
    db_session.commit()
    db_session.refresh(review)
    return review


# =============================================================================
# CLIENT FIXTURES
# =============================================================================

class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeBackend:
    """
    In-memory implementation of the REST API for client tests.

    Tokens are "token-<user id>". Every request is recorded in
    `requests`; setting `fail_with` to an httpx exception makes every
    request fail at the transport level.
    """

    def __init__(self) -> None:
        self.users: list[dict] = []
        self.books: list[dict] = []
        self.reviews: list[dict] = []
        self.requests: list[httpx.Request] = []
        self.fail_with: Exception | None = None
        self._next_id = 1

    def _new_id(self) -> int:
        new_id = self._next_id
        self._next_id += 1
        return new_id

    # -------------------------------------------------------------------------
    # Seeding helpers
    # -------------------------------------------------------------------------
    def add_user(self, name: str, email: str, password: str) -> dict:
        user = {"_id": self._new_id(), "name": name, "email": email, "password": password}
        self.users.append(user)
        return {**self._public(user), "token": f"token-{user['_id']}"}

    def add_book(self, owner: dict, title: str, author: str = "Anon", genre: str = "Fiction",
                 year: int = 2000, description: str = "A book.") -> dict:
        book = {
            "_id": self._new_id(),
            "title": title,
            "author": author,
            "description": description,
            "genre": genre,
            "year": year,
            "addedBy": owner["_id"],
            "addedByName": owner["name"],
        }
        self.books.append(book)
        return book

    def add_review(self, user: dict, book: dict, rating: int, text: str = "Nice.") -> dict:
        review = {
            "_id": self._new_id(),
            "bookId": book["_id"],
            "userId": user["_id"],
            "userName": user["name"],
            "rating": rating,
            "reviewText": text,
            "createdAt": "2024-01-15T10:30:00Z",
        }
        self.reviews.append(review)
        return review

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------
    @staticmethod
    def _public(user: dict) -> dict:
        return {"_id": user["_id"], "name": user["name"], "email": user["email"]}

    def _caller(self, request: httpx.Request) -> dict | None:
        header = request.headers.get("Authorization", "")
        if not header.startswith("Bearer token-"):
            return None
        user_id = int(header.removeprefix("Bearer token-"))
        return next((u for u in self.users if u["_id"] == user_id), None)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with

        method = request.method
        path = request.url.path.removeprefix("/api")
        body = json.loads(request.content) if request.content else {}

        if method == "POST" and path == "/auth/signup":
            if any(u["email"] == body["email"] for u in self.users):
                return httpx.Response(400, json={"message": "User already exists"})
            return httpx.Response(201, json=self.add_user(body["name"], body["email"], body["password"]))

        if method == "POST" and path == "/auth/login":
            user = next((u for u in self.users if u["email"] == body["email"]), None)
            if user is None or user["password"] != body["password"]:
                return httpx.Response(401, json={"message": "Invalid email or password"})
            return httpx.Response(200, json={**self._public(user), "token": f"token-{user['_id']}"})

        if method == "GET" and path == "/books":
            return httpx.Response(200, json=self.books)

        if method == "GET" and path.startswith("/reviews/"):
            book_id = int(path.rsplit("/", 1)[1])
            return httpx.Response(200, json=[r for r in self.reviews if r["bookId"] == book_id])

        caller = self._caller(request)
        if caller is None:
            return httpx.Response(401, json={"message": "Not authorized, no token"})

        if method == "POST" and path == "/books":
            return httpx.Response(201, json=self.add_book(
                caller,
                body["title"],
                author=body["author"],
                genre=body["genre"],
                year=body["year"],
                description=body["description"],
            ))

        if method == "DELETE" and path.startswith("/books/"):
            book_id = int(path.rsplit("/", 1)[1])
            book = next((b for b in self.books if b["_id"] == book_id), None)
            if book is None:
                return httpx.Response(404, json={"message": "Book not found"})
            if book["addedBy"] != caller["_id"]:
                return httpx.Response(401, json={"message": "User not authorized"})
            self.books.remove(book)
            self.reviews = [r for r in self.reviews if r["bookId"] != book_id]
            return httpx.Response(200, json={"message": "Book removed"})

        if method == "POST" and path.startswith("/reviews/"):
            book_id = int(path.rsplit("/", 1)[1])
            book = next((b for b in self.books if b["_id"] == book_id), None)
            if book is None:
                return httpx.Response(404, json={"message": "Book not found"})
            return httpx.Response(201, json=self.add_review(
                caller, book, body["rating"], body["reviewText"]
            ))

        return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def storage_dir(tmp_path):
    return tmp_path / "storage"


@pytest.fixture
def store_factory(fake_backend: FakeBackend, storage_dir, clock: FakeClock):
    """
    Build Stores that talk to fake_backend and share one storage directory.

    Several stores built from the same factory behave like successive runs
    of the client on one machine.
    """

    def make_store() -> Store:
        transport = httpx.MockTransport(fake_backend.handler)
        return Store(
            lambda token_provider: BookReviewAPI(
                "http://test/api",
                token_provider=token_provider,
                transport=transport,
            ),
            LocalStorage(storage_dir),
            clock=clock,
        )

    return make_store
