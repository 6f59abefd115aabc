from bookapi.models.base_model import Base
from bookapi.models.author import Author
from bookapi.models.book import Book
from bookapi.models.user import User
from bookapi.models.db_storage import DBStorage

__all__ = ["Base", "Author", "Book", "User", "DBStorage"]
