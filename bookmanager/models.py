"""Data models for books."""
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, List, Union


@dataclass
class Book:
    """A book record, either from the server or a form draft.
    
    Drafts hold raw form input, so ``year`` and ``copies`` may be strings
    until the draft is serialised.
    """
    id: str = ""
    title: str = ""
    author: str = ""
    publisher: str = ""
    category: str = ""
    isbn: str = ""
    year: Union[int, str] = ""
    copies: Union[int, str] = ""
    
    def to_dict(self) -> Dict[str, Any]:
        """Serialise for a request body, converting numeric fields."""
        data = asdict(self)
        for key in NUMERIC_FIELDS:
            data[key] = to_int(data[key])
        return data


def to_int(value: Any) -> Any:
    """Convert form input to int, leaving non-numeric values as they are."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return value


FIELD_NAMES: List[str] = [f.name for f in fields(Book)]
NUMERIC_FIELDS = ("year", "copies")
