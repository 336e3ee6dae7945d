from .books import BookIdMismatchError, BookNotFoundError, BooksRepository

__all__ = ["BooksRepository", "BookNotFoundError", "BookIdMismatchError"]
