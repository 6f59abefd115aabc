from sqlalchemy import Column, String

from bookapi.models.base_model import BaseModel, Base


class Author(BaseModel, Base):
    __tablename__ = "authors"

    last_name = Column(String(255), nullable=False)  # non-blank enforced in schema
    first_name = Column(String(255), nullable=True)

    # No books relationship here: an author's books are DBStorage.books_of(author.id)
