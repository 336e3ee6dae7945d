"""
Books API routes.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from db import get_books_repo
from repositories import BookIdMismatchError, BookNotFoundError, BooksRepository
from storage.json_document import StorageError

router = APIRouter()
logger = logging.getLogger(__name__)

BOOK_EXAMPLE = {
    "id": "d5fE_asz",
    "title": "The New Turing Omnibus",
    "author": "Alexander K. Dewdney",
}
BOOK_BODY_EXAMPLE = {"title": BOOK_EXAMPLE["title"], "author": BOOK_EXAMPLE["author"]}


class Book(BaseModel):
    """Documented shape of a book. Extra fields are kept as sent."""

    model_config = ConfigDict(extra="allow", json_schema_extra={"example": BOOK_EXAMPLE})

    id: Optional[str] = Field(None, description="The auto-generated id of the book")
    title: str = Field(..., description="The book title")
    author: str = Field(..., description="The book author")


class Library(BaseModel):
    books: List[Book]


class StorageErrorResponse(BaseModel):
    name: str
    message: str


def storage_error_response(exc: StorageError) -> JSONResponse:
    """Serialize a storage failure as the response body."""
    return JSONResponse(
        status_code=500,
        content={"name": type(exc).__name__, "message": str(exc)},
    )


@router.get("", responses={200: {"model": Library, "description": "The whole library document"}})
def list_books(repo: BooksRepository = Depends(get_books_repo)):
    """Return the list of all the books."""
    return repo.list_books()


@router.get(
    "/{book_id}",
    responses={
        200: {"model": List[Book], "description": "Books with this id (a single book with strict lookups)"},
        404: {"description": "The book was not found (strict lookups only)"},
    },
)
def get_book(book_id: str, repo: BooksRepository = Depends(get_books_repo)):
    """Get the book by id."""
    if not repo.strict:
        return repo.find_books(book_id)
    try:
        return repo.get_book(book_id)
    except BookNotFoundError:
        raise HTTPException(status_code=404, detail="Book not found")


@router.post(
    "",
    responses={
        200: {"model": Book, "description": "The book was successfully created"},
        500: {"model": StorageErrorResponse, "description": "Some server error"},
    },
)
def create_book(
    body: Dict[str, Any] = Body(..., examples=[BOOK_BODY_EXAMPLE]),
    repo: BooksRepository = Depends(get_books_repo),
):
    """Create a new book."""
    try:
        return repo.create_book(body)
    except StorageError as exc:
        logger.exception("Failed to create book")
        return storage_error_response(exc)


@router.put(
    "/{book_id}",
    responses={
        200: {"model": Book, "description": "The book was updated"},
        400: {"description": "Body id does not match path id (strict lookups only)"},
        404: {"description": "The book was not found (strict lookups only)"},
        500: {"model": StorageErrorResponse, "description": "Some error happened"},
    },
)
def update_book(
    book_id: str,
    body: Dict[str, Any] = Body(..., examples=[BOOK_BODY_EXAMPLE]),
    repo: BooksRepository = Depends(get_books_repo),
):
    """Update the book by the id."""
    try:
        return repo.update_book(book_id, body)
    except BookIdMismatchError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except BookNotFoundError:
        raise HTTPException(status_code=404, detail="Book not found")
    except StorageError as exc:
        logger.exception("Failed to update book %s", book_id)
        return storage_error_response(exc)


@router.delete(
    "/{book_id}",
    responses={
        200: {"description": "The book was deleted"},
        404: {"description": "The book was not found (strict lookups only)"},
    },
)
def delete_book(book_id: str, repo: BooksRepository = Depends(get_books_repo)):
    """Remove the book by id."""
    try:
        repo.delete_book(book_id)
    except BookNotFoundError:
        raise HTTPException(status_code=404, detail="Book not found")
    return Response(status_code=200)
