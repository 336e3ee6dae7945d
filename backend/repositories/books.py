"""
Book repository backed by a single JSON document.
"""
import contextlib
import logging
import threading
from typing import Any, Dict, List

from domain.models import BookRecord, generate_book_id
from storage.json_document import JsonDocumentStorage

logger = logging.getLogger(__name__)


class BookNotFoundError(LookupError):
    """No book carries the requested id (strict lookups only)."""


class BookIdMismatchError(ValueError):
    """Update body names a different id than the path (strict lookups only)."""


class BooksRepository:
    """
    CRUD operations for books.

    Each call loads the whole document and, for writes, saves it back. With
    ``serialize_writes`` the load/modify/save of every write runs under one
    lock so concurrent writes cannot overwrite each other. With ``strict``
    lookups, unknown ids raise ``BookNotFoundError`` instead of being ignored.
    """

    def __init__(
        self,
        storage: JsonDocumentStorage,
        strict: bool = False,
        serialize_writes: bool = True,
    ):
        self.storage = storage
        self.strict = strict
        self.serialize_writes = serialize_writes
        self._lock = threading.RLock()

    def _write_guard(self):
        if self.serialize_writes:
            return self._lock
        return contextlib.nullcontext()

    def list_books(self) -> Dict[str, Any]:
        """Return the whole document, not only the books."""
        return self.storage.load().to_dict()

    def find_books(self, book_id: str) -> List[BookRecord]:
        """Every book whose id equals ``book_id``; empty when none match."""
        return self.storage.load().find(book_id)

    def get_book(self, book_id: str) -> BookRecord:
        matches = self.find_books(book_id)
        if not matches:
            raise BookNotFoundError(book_id)
        return matches[0]

    def create_book(self, body: Dict[str, Any]) -> BookRecord:
        fields = {k: v for k, v in body.items() if k != "id"}
        book = {"id": generate_book_id(), **fields}
        with self._write_guard():
            document = self.storage.load()
            document.books.append(book)
            self.storage.save(document)
        logger.info("Created book %s", book["id"])
        return book

    def update_book(self, book_id: str, body: Dict[str, Any]) -> BookRecord:
        """
        Replace every book with ``book_id`` by ``body``.

        The body is stored verbatim, so without an ``id`` the record can no
        longer be reached by the old id. Strict lookups default the id to
        ``book_id`` and reject a differing one.
        """
        record = dict(body)
        if self.strict:
            if "id" in record and record["id"] != book_id:
                raise BookIdMismatchError(
                    f"Body id {record['id']!r} does not match path id {book_id!r}"
                )
            record = {"id": book_id, **record}

        with self._write_guard():
            document = self.storage.load()
            removed = document.remove(book_id)
            if self.strict and not removed:
                raise BookNotFoundError(book_id)
            document.books.append(record)
            self.storage.save(document)
        logger.info("Updated book %s (%d record(s) replaced)", book_id, removed)
        return record

    def delete_book(self, book_id: str) -> int:
        """Remove every book with ``book_id``. Returns the number removed."""
        with self._write_guard():
            document = self.storage.load()
            removed = document.remove(book_id)
            if self.strict and not removed:
                raise BookNotFoundError(book_id)
            self.storage.save(document)
        logger.info("Deleted book %s (%d record(s) removed)", book_id, removed)
        return removed
