"""Async HTTP client for the book REST API."""
import httpx
from typing import Any, Dict, List, Optional
from urllib.parse import quote
import logging
from bookmanager.models import Book
from bookmanager.parse import parse_book, parse_books_response

logger = logging.getLogger(__name__)


class AsyncBookApiClient:
    """Async counterpart of BookApiClient with the same return contract."""

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize async client.

        Args:
            base_url: API root
            timeout: Request timeout (None waits indefinitely)
            client: Optional pre-built httpx client
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        # Create async HTTP client
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def list_books(self) -> Optional[List[Book]]:
        """Fetch every book, or None on failure."""
        response = await self._request("GET", "/all")
        if response is None:
            return None

        data = self._decode(response)
        if not isinstance(data, list):
            logger.error(f"Expected a list of books from /all, got {type(data).__name__}")
            return None
        return parse_books_response(data)

    async def get_book(self, book_id: str) -> Optional[Book]:
        """Fetch one book, or None when not found or on failure."""
        response = await self._request("GET", f"/get/{quote(str(book_id), safe='')}")
        if response is None:
            return None

        if not response.content:
            logger.info(f"Book {book_id} not found")
            return None

        data = self._decode(response)
        if not data:
            return None
        return parse_book(data)

    async def add_book(self, book: Book) -> bool:
        return await self._request("POST", "/add", json=book.to_dict()) is not None

    async def update_book(self, book: Book) -> bool:
        return await self._request("PUT", "/update", json=book.to_dict()) is not None

    async def delete_book(self, book_id: str) -> bool:
        path = f"/delete/{quote(str(book_id), safe='')}"
        return await self._request("DELETE", path) is not None

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None
    ) -> Optional[httpx.Response]:
        url = f"{self.base_url}{path}"

        try:
            logger.info(f"Async {method} {url}")
            response = await self.client.request(method, url, json=json)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Async {method} {url} failed: {e}")
            return None

        if response.status_code >= 400:
            logger.error(f"Async {method} {url} returned {response.status_code}")
            return None

        return response

    def _decode(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {response.url}: {e}")
            return None

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
