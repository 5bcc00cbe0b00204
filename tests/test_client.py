"""Tests for the requests-based API client."""
from unittest.mock import MagicMock
import requests
from bookmanager.client import BookApiClient
from bookmanager.models import Book


def make_response(status_code=200, payload=None, content=b"x"):
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.text = ""
    response.url = "http://api"
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


def make_client(*responses):
    session = MagicMock()
    session.request.side_effect = list(responses)
    return BookApiClient("http://api/", timeout=5, session=session), session


def test_list_books_success():
    """Test GET /all is parsed into books."""
    client, session = make_client(make_response(payload=[{"id": "1", "title": "Dune"}]))

    books = client.list_books()

    assert [b.title for b in books] == ["Dune"]
    session.request.assert_called_once_with("GET", "http://api/all", json=None, timeout=5)


def test_list_books_server_error_returns_none():
    """Test a 500 is reported as failure."""
    client, _ = make_client(make_response(status_code=500))

    assert client.list_books() is None


def test_list_books_connection_error_returns_none():
    """Test transport errors are swallowed into None."""
    client, _ = make_client(requests.exceptions.ConnectionError("refused"))

    assert client.list_books() is None


def test_list_books_invalid_json_returns_none():
    """Test an undecodable body is a failure."""
    client, _ = make_client(make_response(payload=ValueError("bad json")))

    assert client.list_books() is None


def test_get_book_quotes_id():
    """Test the id is URL-quoted into the path."""
    client, session = make_client(make_response(payload={"id": "a/b", "title": "T"}))

    book = client.get_book("a/b")

    assert book.id == "a/b"
    assert session.request.call_args[0][1] == "http://api/get/a%2Fb"


def test_get_book_not_found():
    """Test 404 and empty 200 both mean not found."""
    client, _ = make_client(make_response(status_code=404), make_response(content=b""))

    assert client.get_book("9") is None
    assert client.get_book("9") is None


def test_add_book_posts_serialised_draft():
    """Test POST /add sends the draft with numeric fields converted."""
    client, session = make_client(make_response())
    draft = Book("", "Dune", "Herbert", "Chilton", "SciFi", "123", "1965", "3")

    assert client.add_book(draft) is True

    method, url = session.request.call_args[0]
    assert (method, url) == ("POST", "http://api/add")
    assert session.request.call_args[1]["json"]["year"] == 1965


def test_update_book_puts_with_id():
    """Test PUT /update carries the id."""
    client, session = make_client(make_response(status_code=400), make_response())
    book = Book("7", "Dune", "Herbert", "Chilton", "SciFi", "123", 1965, 3)

    assert client.update_book(book) is False
    assert client.update_book(book) is True
    assert session.request.call_args[1]["json"]["id"] == "7"


def test_delete_book():
    """Test DELETE /delete/{id}."""
    client, session = make_client(make_response(content=b""), requests.exceptions.Timeout())

    assert client.delete_book("5") is True
    assert session.request.call_args[0] == ("DELETE", "http://api/delete/5")
    assert client.delete_book("5") is False


def test_context_manager_closes_session():
    """Test the session is closed on exit."""
    client, session = make_client()

    with client:
        pass

    session.close.assert_called_once()


def test_list_books_non_list_payload_returns_none():
    """Test a 200 with an object body is a failure, not an empty list."""
    client, _ = make_client(make_response(payload={"error": "oops"}))

    assert client.list_books() is None
