"""Text rendering of books and form state."""
import json
from dataclasses import asdict
from typing import List
from tabulate import tabulate
from bookmanager.models import Book, FIELD_NAMES

LIST_HEADERS = ["ID", "Title", "Author", "Year", "Copies"]
NO_BOOKS = "No books available"

# ISBN reads better upper-cased
LABELS = {name: name.capitalize() for name in FIELD_NAMES}
LABELS["id"] = "ID"
LABELS["isbn"] = "ISBN"


def render_books(books: List[Book], format_type: str = "table") -> str:
    """Render the book list in the given format."""
    if format_type == "json":
        return json.dumps([book.to_dict() for book in books], indent=2)

    if not books:
        return NO_BOOKS

    if format_type == "compact":
        return "\n".join(
            f"{i}. [{book.id}] {book.title} - {book.author}"
            for i, book in enumerate(books, 1)
        )

    rows = [
        [
            book.id,
            book.title[:50] + "..." if len(book.title) > 50 else book.title,
            book.author[:30] + "..." if len(book.author) > 30 else book.author,
            book.year,
            book.copies
        ]
        for book in books
    ]
    return tabulate(rows, headers=LIST_HEADERS, tablefmt="grid")


def render_book(book: Book) -> str:
    """All fields of one book as label/value rows."""
    values = asdict(book)
    return "\n".join(f"{LABELS[name]}: {values[name]}" for name in FIELD_NAMES)


def render_state(manager) -> str:
    """Snapshot of everything the form currently shows."""
    parts = []

    if manager.message:
        parts.append(f">> {manager.message}")

    mode = "Update Book" if manager.edit_mode else "Add Book"
    values = asdict(manager.draft)
    rows = [[LABELS[name], values[name]] for name in manager.editable_fields()]
    parts.append(f"[{mode}]\n" + tabulate(rows, tablefmt="plain"))

    if manager.view_book:
        parts.append("[Viewed Book]\n" + render_book(manager.view_book))

    parts.append("[Book List]\n" + render_books(manager.books))
    return "\n\n".join(parts)
