"""
JSON document storage.

Holds the whole library as a single JSON file:

    { "books": [ {"id": ..., "title": ..., "author": ...}, ... ] }

Every load reads the full file and every save rewrites it. Can be swapped for
another backend as long as it exposes ``load``/``save``.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from domain.models import Document

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Reading or writing the backing document failed."""


class JsonDocumentStorage:
    """
    Local JSON file storage.

    A missing file reads as an empty document; it is created on first save.
    """

    def __init__(self, path: Union[str, Path] = "db.json"):
        self.path = Path(path)

    def load(self) -> Document:
        """Read the full document from disk."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            return Document()
        except OSError as exc:
            raise StorageError(f"Failed to read {self.path}: {exc}") from exc

        if not raw.strip():
            return Document()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Invalid JSON in {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise StorageError(f"Document root in {self.path} must be an object")
        books = data.get("books", [])
        if not isinstance(books, list):
            raise StorageError(f"'books' in {self.path} must be a list")
        for index, book in enumerate(books):
            if not isinstance(book, dict):
                raise StorageError(f"Book #{index} in {self.path} must be an object")
        return Document.from_dict(data)

    def save(self, document: Document) -> None:
        """
        Rewrite the full document.

        Writes to a temporary file in the same directory and renames it over
        the target, so a reader sees either the old or the new document.
        """
        payload = json.dumps(document.to_dict(), ensure_ascii=False, indent=2)
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(directory)
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise StorageError(f"Failed to write {self.path}: {exc}") from exc
        logger.debug("Wrote %d book(s) to %s", len(document.books), self.path)
