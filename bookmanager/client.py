"""HTTP client for the book REST API."""
import requests
from typing import Any, Dict, List, Optional
from urllib.parse import quote
import logging
from bookmanager.models import Book
from bookmanager.parse import parse_book, parse_books_response

logger = logging.getLogger(__name__)


class BookApiClient:
    """Client for the book CRUD endpoints.

    Every call is best-effort: failures are logged and reported through the
    return value, never raised. There is no retry.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize book API client.

        Args:
            base_url: API root, e.g. http://localhost:8080
            timeout: Request timeout in seconds (None waits indefinitely)
            session: Optional pre-built session
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        # Create session for connection pooling
        self.session = session or requests.Session()

    def list_books(self) -> Optional[List[Book]]:
        """
        Fetch every book.

        Returns:
            List of books, or None if the request failed
        """
        response = self._request("GET", "/all")
        if response is None:
            return None

        data = self._decode(response)
        if not isinstance(data, list):
            logger.error(f"Expected a list of books from /all, got {type(data).__name__}")
            return None
        return parse_books_response(data)

    def get_book(self, book_id: str) -> Optional[Book]:
        """
        Fetch one book by id.

        Returns:
            Book, or None when not found or the request failed
        """
        response = self._request("GET", f"/get/{quote(str(book_id), safe='')}")
        if response is None:
            return None

        # Some servers answer 200 with an empty body for unknown ids
        if not response.content:
            logger.info(f"Book {book_id} not found")
            return None

        data = self._decode(response)
        if not data:
            return None
        return parse_book(data)

    def add_book(self, book: Book) -> bool:
        """POST a new book."""
        return self._request("POST", "/add", json=book.to_dict()) is not None

    def update_book(self, book: Book) -> bool:
        """PUT the full book, id included."""
        return self._request("PUT", "/update", json=book.to_dict()) is not None

    def delete_book(self, book_id: str) -> bool:
        """DELETE a book by id."""
        path = f"/delete/{quote(str(book_id), safe='')}"
        return self._request("DELETE", path) is not None

    def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None
    ) -> Optional[requests.Response]:
        """
        Make one HTTP request.

        Args:
            method: HTTP method
            path: Path below the base URL
            json: Optional JSON body

        Returns:
            Response for 2xx/3xx, None otherwise
        """
        url = f"{self.base_url}{path}"

        try:
            logger.info(f"{method} {url}")
            response = self.session.request(
                method,
                url,
                json=json,
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            return None

        # 4xx and 5xx are treated alike
        if response.status_code >= 400:
            logger.error(f"{method} {url} returned {response.status_code}: {response.text}")
            return None

        return response

    def _decode(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {response.url}: {e}")
            return None

    def close(self):
        """Close the session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
