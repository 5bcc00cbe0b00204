"""Tests for text rendering."""
import json
from unittest.mock import MagicMock
from bookmanager.manager import BookFormManager
from bookmanager.models import Book
from bookmanager.view import render_books, render_book, render_state

DUNE = Book("7", "Dune", "Herbert", "Chilton", "SciFi", "123", 1965, 3)


def test_render_books_empty():
    """Test the empty list placeholder."""
    assert render_books([]) == "No books available"


def test_render_books_table():
    """Test the table has the list columns and the book row."""
    output = render_books([DUNE])

    for header in ["ID", "Title", "Author", "Year", "Copies"]:
        assert header in output
    assert "Dune" in output
    assert "1965" in output
    assert "Chilton" not in output


def test_render_books_json():
    """Test JSON output carries every field."""
    data = json.loads(render_books([DUNE], "json"))

    assert data == [DUNE.to_dict()]


def test_render_books_compact():
    """Test one line per book."""
    assert render_books([DUNE], "compact") == "1. [7] Dune - Herbert"


def test_render_book():
    """Test the detail view lists all fields."""
    output = render_book(DUNE)

    assert output.splitlines()[0] == "ID: 7"
    assert "ISBN: 123" in output
    assert "Copies: 3" in output


def test_render_state_in_edit_mode():
    """Test the snapshot shows message, mode and hides the id input."""
    manager = BookFormManager(MagicMock(), MagicMock())
    manager.edit(DUNE)
    manager.message = "Book not found."

    output = render_state(manager)

    assert output.startswith(">> Book not found.")
    assert "[Update Book]" in output
    assert "ID" not in output.split("[Book List]")[0]
    assert "No books available" in output
