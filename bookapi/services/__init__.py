from bookapi.services.authors import AuthorService
from bookapi.services.books import BookService
from bookapi.services.exceptions import NotFoundError

__all__ = ["AuthorService", "BookService", "NotFoundError"]
