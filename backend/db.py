"""
Store setup for the FastAPI backend.
Builds the JSON-backed books repository once and hands it to request handlers.
"""
from pathlib import Path
from typing import Optional, Union

from fastapi import Request

from repositories import BooksRepository
from settings import settings
from storage.json_document import JsonDocumentStorage


def init_db(db_file: Optional[Union[str, Path]] = None) -> BooksRepository:
    """Create the repository for ``db_file`` (defaults to ``DB_FILE``)."""
    storage = JsonDocumentStorage(db_file or settings.DB_FILE)
    return BooksRepository(
        storage,
        strict=settings.STRICT_LOOKUPS,
        serialize_writes=settings.SERIALIZE_WRITES,
    )


def get_books_repo(request: Request) -> BooksRepository:
    """FastAPI dependency returning the app's repository."""
    return request.app.state.books_repo
