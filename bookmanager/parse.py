"""Parse and normalize book API responses."""
import logging
from typing import Any, Dict, List, Optional
from bookmanager.models import Book, to_int

logger = logging.getLogger(__name__)


def parse_book(item: Dict[str, Any]) -> Optional[Book]:
    """
    Parse a single book object returned by the API.
    
    Args:
        item: Decoded JSON object for one book
        
    Returns:
        Book object or None if the item is not an object
    """
    if not isinstance(item, dict):
        logger.warning(f"Skipping non-object book payload: {item!r}")
        return None
    
    # Missing strings become blank, numbers are coerced when possible
    return Book(
        id=_text(item.get("id")),
        title=_text(item.get("title")),
        author=_text(item.get("author")),
        publisher=_text(item.get("publisher")),
        category=_text(item.get("category")),
        isbn=_text(item.get("isbn")),
        year=_number(item.get("year")),
        copies=_number(item.get("copies"))
    )


def parse_books_response(response_json: Any) -> List[Book]:
    """
    Parse the ``/all`` response.
    
    Args:
        response_json: Decoded JSON array of books
        
    Returns:
        List of Book objects (empty if the payload is not a list)
    """
    if not isinstance(response_json, list):
        logger.warning(f"Expected a list of books, got {type(response_json).__name__}")
        return []
    
    books = []
    for item in response_json:
        book = parse_book(item)
        if book:
            books.append(book)
    
    return books


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _number(value: Any) -> Any:
    if value is None:
        return ""
    return to_int(value)
