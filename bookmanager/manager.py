"""Form and list state for managing books over the REST API."""
from dataclasses import replace
from typing import Any, Callable, List, Optional
import logging
from bookmanager.client import BookApiClient
from bookmanager.models import Book, FIELD_NAMES

logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to fetch books."
SAVE_FAILED = "Operation failed."
DELETE_FAILED = "Delete failed."
DELETE_BY_ID_FAILED = "Book not found or delete failed."
NOT_FOUND = "Book not found."
ADDED = "Book added successfully!"
UPDATED = "Book updated successfully!"
DELETED = "Book deleted successfully!"
ENTER_ID = "Please enter a Book ID."
ENTER_DELETE_ID = "Please enter a Book ID to delete."
CONFIRM_DELETE = "Are you sure you want to delete this book?"


def _is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


class BookFormManager:
    """
    Holds the draft, list cache and lookup inputs of the book form.

    The server is the source of truth: after every successful mutation
    the list is refetched in full rather than patched locally. Every
    operation leaves its outcome in ``message``, replacing the previous one.
    """

    def __init__(self, client: BookApiClient, confirm: Callable[[str], bool]):
        """
        Args:
            client: API client used for every remote call
            confirm: Asks the user a yes/no question, True to proceed
        """
        self.client = client
        self.confirm = confirm

        self.books: List[Book] = []
        self.draft = Book()
        self.edit_mode = False
        self.message = ""
        self.search_id = ""
        self.delete_id = ""
        self.view_book: Optional[Book] = None

    def mount(self):
        """Initial list load."""
        self.fetch_books()

    def fetch_books(self) -> bool:
        """Replace the cache with the server list; keep it on failure."""
        books = self.client.list_books()
        if books is None:
            logger.error("Error fetching books")
            self.message = FETCH_FAILED
            return False

        self.books = books
        return True

    def editable_fields(self) -> List[str]:
        """Form inputs currently shown; id is fixed once a book exists."""
        if self.edit_mode:
            return [name for name in FIELD_NAMES if name != "id"]
        return list(FIELD_NAMES)

    def set_field(self, name: str, value: Any):
        """Form change handler."""
        if name not in FIELD_NAMES:
            raise ValueError(f"Unknown book field: {name}")
        if name not in self.editable_fields():
            raise ValueError(f"Field '{name}' cannot be changed while editing")

        self.draft = replace(self.draft, **{name: value})

    def validate(self) -> bool:
        """Check the draft, reporting only the first blank field."""
        for name in FIELD_NAMES:
            if name == "id" and not self.edit_mode:
                continue
            if _is_blank(getattr(self.draft, name)):
                self.message = f"Please fill out the {name} field"
                return False
        return True

    def submit(self) -> bool:
        """Save the draft: update in edit mode, create otherwise."""
        if self.edit_mode:
            return self.update()
        return self.create()

    def create(self) -> bool:
        """Validate and POST the draft."""
        return self._save(self.client.add_book, ADDED)

    def update(self) -> bool:
        """Validate and PUT the draft, id included."""
        return self._save(self.client.update_book, UPDATED)

    def _save(self, send: Callable[[Book], bool], success_message: str) -> bool:
        if not self.validate():
            return False

        if not send(self.draft):
            logger.error(f"Error saving book {self.draft.id!r}")
            self.message = SAVE_FAILED
            return False

        self.message = success_message
        self._reset_draft()
        self.fetch_books()
        return True

    def edit(self, book: Book):
        """Load an existing book into the form."""
        self.draft = replace(book)
        self.edit_mode = True
        self.message = ""

    def cancel_edit(self):
        """Discard the draft and go back to create mode."""
        self._reset_draft()

    def _reset_draft(self):
        self.draft = Book()
        self.edit_mode = False

    def delete(self, book_id: str) -> bool:
        """Delete a listed book after confirmation."""
        if not self.confirm(CONFIRM_DELETE):
            return False

        if not self.client.delete_book(book_id):
            logger.error(f"Error deleting book {book_id!r}")
            self.message = DELETE_FAILED
            return False

        self.message = DELETED
        self.fetch_books()
        return True

    def delete_by_id(self, book_id: Optional[str] = None) -> bool:
        """Delete the book named in the delete-by-id input."""
        if book_id is not None:
            self.delete_id = book_id
        book_id = self.delete_id.strip()
        if not book_id:
            self.message = ENTER_DELETE_ID
            return False

        if not self.confirm(f"Are you sure you want to delete book with ID {book_id}?"):
            return False

        if not self.client.delete_book(book_id):
            logger.error(f"Error deleting book by ID {book_id!r}")
            self.message = DELETE_BY_ID_FAILED
            return False

        self.message = DELETED
        self.delete_id = ""
        self.fetch_books()
        return True

    def view_by_id(self, book_id: Optional[str] = None) -> bool:
        """Look up the book named in the search input."""
        if book_id is not None:
            self.search_id = book_id
        book_id = self.search_id.strip()
        if not book_id:
            self.message = ENTER_ID
            self.view_book = None
            return False

        book = self.client.get_book(book_id)
        if book is None:
            logger.error(f"Error fetching book by ID {book_id!r}")
            self.message = NOT_FOUND
            self.view_book = None
            return False

        self.view_book = book
        self.message = ""
        return True
