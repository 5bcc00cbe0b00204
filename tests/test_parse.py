"""Tests for parsing functions."""
from bookmanager.parse import parse_book, parse_books_response
from bookmanager.models import Book


def test_parse_book_complete():
    """Test parsing a book with all fields present."""
    item = {
        "id": "7",
        "title": "Dune",
        "author": "Herbert",
        "publisher": "Chilton",
        "category": "SciFi",
        "isbn": "123",
        "year": 1965,
        "copies": 3
    }

    book = parse_book(item)

    assert book == Book("7", "Dune", "Herbert", "Chilton", "SciFi", "123", 1965, 3)


def test_parse_book_missing_fields():
    """Test parsing a book with missing fields."""
    book = parse_book({"id": 5, "title": "Mystery Book", "author": None})

    assert book is not None
    assert book.id == "5"
    assert book.title == "Mystery Book"
    assert book.author == ""
    assert book.year == ""
    assert book.copies == ""


def test_parse_book_coerces_numbers():
    """Test numeric strings become ints and junk is left alone."""
    book = parse_book({"id": "1", "year": "1965", "copies": "many"})

    assert book.year == 1965
    assert book.copies == "many"


def test_parse_book_not_an_object():
    """Test that a non-object item returns None."""
    assert parse_book(["not", "a", "book"]) is None


def test_parse_books_response():
    """Test parsing the list endpoint payload."""
    response = [
        {"id": "1", "title": "Book 1"},
        "garbage",
        {"id": "2", "title": "Book 2"}
    ]

    books = parse_books_response(response)

    assert len(books) == 2
    assert books[0].title == "Book 1"
    assert books[1].title == "Book 2"


def test_parse_books_response_not_a_list():
    """Test that an unexpected payload yields no books."""
    assert parse_books_response({"items": []}) == []


def test_to_dict_converts_numeric_fields():
    """Test draft serialisation for request bodies."""
    draft = Book("", "Dune", "Herbert", "Chilton", "SciFi", "123", " 1965 ", "3")

    data = draft.to_dict()

    assert data["year"] == 1965
    assert data["copies"] == 3
    assert data["id"] == ""
    assert list(data) == ["id", "title", "author", "publisher", "category", "isbn", "year", "copies"]
