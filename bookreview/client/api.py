"""
BookReview HTTP Client

Async wrapper around the BookReview REST API using httpx.

Every request carries "Authorization: Bearer <token>" when a token is
available from the token provider (normally the persisted session).
Every failed call raises APIError: error statuses carry the server's
"message", and transport failures or unreadable bodies carry a
per-call fallback text.

Usage:
    async with BookReviewAPI("http://localhost:8001/api") as api:
        books = await api.list_books()
"""

import logging
from collections.abc import Callable
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from bookreview.client.models import BookItem, ReviewItem, SessionUser

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], str | None]

_BOOK_LIST = TypeAdapter(list[BookItem])
_REVIEW_LIST = TypeAdapter(list[ReviewItem])


class APIError(Exception):
    """A failed API call, with a message fit to show the user."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _extract_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None


class BookReviewAPI:
    """
    Async client for the BookReview API.

    Args:
        base_url: API root including its prefix, e.g. http://host:8001/api
        token_provider: Callable returning the current bearer token or None
        timeout: Request timeout in seconds
        transport: Optional httpx transport (tests pass httpx.MockTransport)
    """

    def __init__(
        self,
        base_url: str,
        token_provider: TokenProvider | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url
        self.token_provider = token_provider or (lambda: None)
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "BookReviewAPI":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        fallback: str,
        parse: Callable[[Any], Any] | None = None,
        **kwargs: Any,
    ) -> Any:
        """
        Send a request and return its parsed JSON body.

        Transport failures, error statuses, non-JSON bodies and bodies that
        `parse` rejects all raise APIError.
        """
        headers = kwargs.pop("headers", {})
        token = self.token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
        except httpx.RequestError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise APIError(fallback) from e

        if response.is_error:
            message = _extract_message(response) or fallback
            logger.info(f"{method} {path} -> {response.status_code}: {message}")
            raise APIError(message, status_code=response.status_code)

        try:
            data = response.json()
            return parse(data) if parse is not None else data
        except (ValueError, ValidationError) as e:
            logger.warning(f"{method} {path} returned an unexpected body: {e}")
            raise APIError(fallback, status_code=response.status_code) from e

    # -------------------------------------------------------------------------
    # Auth
    # -------------------------------------------------------------------------
    async def signup(self, name: str, email: str, password: str) -> SessionUser:
        return await self._request(
            "POST",
            "/auth/signup",
            "Signup failed",
            parse=SessionUser.model_validate,
            json={"name": name, "email": email, "password": password},
        )

    async def login(self, email: str, password: str) -> SessionUser:
        return await self._request(
            "POST",
            "/auth/login",
            "Invalid credentials",
            parse=SessionUser.model_validate,
            json={"email": email, "password": password},
        )

    # -------------------------------------------------------------------------
    # Books
    # -------------------------------------------------------------------------
    async def list_books(self) -> list[BookItem]:
        return await self._request(
            "GET", "/books", "Could not fetch books.", parse=_BOOK_LIST.validate_python
        )

    async def add_book(
        self,
        title: str,
        author: str,
        description: str,
        genre: str,
        year: int,
    ) -> BookItem:
        return await self._request(
            "POST",
            "/books",
            "Failed to add book",
            parse=BookItem.model_validate,
            json={
                "title": title,
                "author": author,
                "description": description,
                "genre": genre,
                "year": year,
            },
        )

    async def delete_book(self, book_id: int) -> str:
        data = await self._request("DELETE", f"/books/{book_id}", "Failed to delete book")
        if isinstance(data, dict) and isinstance(data.get("message"), str):
            return data["message"]
        return "Book removed"

    # -------------------------------------------------------------------------
    # Reviews
    # -------------------------------------------------------------------------
    async def list_reviews(self, book_id: int) -> list[ReviewItem]:
        return await self._request(
            "GET", f"/reviews/{book_id}", "Could not fetch reviews.", parse=_REVIEW_LIST.validate_python
        )

    async def add_review(self, book_id: int, rating: int, review_text: str) -> ReviewItem:
        return await self._request(
            "POST",
            f"/reviews/{book_id}",
            "Failed to add review",
            parse=ReviewItem.model_validate,
            json={"rating": rating, "reviewText": review_text},
        )
