"""
Core domain models for the library service.
These are framework-agnostic and shared by storage and repositories.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List
import uuid


BookRecord = Dict[str, Any]


def generate_book_id() -> str:
    """Return a fresh, random book id."""
    return str(uuid.uuid4())


@dataclass
class Document:
    """
    The persisted root object.

    ``books`` keeps insertion order. Any other top-level keys found in the
    stored file are carried in ``extra`` so a rewrite does not drop them.
    """
    books: List[BookRecord] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Document":
        extra = {k: v for k, v in data.items() if k != "books"}
        return cls(books=list(data.get("books") or []), extra=extra)

    def to_dict(self) -> Dict[str, Any]:
        return {**self.extra, "books": self.books}

    def find(self, book_id: str) -> List[BookRecord]:
        return [b for b in self.books if b.get("id") == book_id]

    def remove(self, book_id: str) -> int:
        """Drop every book with ``book_id``. Returns how many were removed."""
        kept = [b for b in self.books if b.get("id") != book_id]
        removed = len(self.books) - len(kept)
        self.books = kept
        return removed
