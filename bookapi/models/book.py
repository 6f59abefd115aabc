from sqlalchemy import Column, String, Integer, ForeignKey, Text, Index
from sqlalchemy.orm import relationship

from bookapi.models.base_model import BaseModel, Base


class Book(BaseModel, Base):
    __tablename__ = "books"

    title = Column(String(255), nullable=False)
    cover_text = Column(Text, nullable=True)

    # Nullable: a book whose authorId did not resolve has no author.
    # Author deletion removes the books explicitly in the service layer.
    author_id = Column(Integer, ForeignKey("authors.id"), nullable=True, index=True)

    # One-way: Book -> Author only
    author = relationship("Author", lazy="joined")

    __table_args__ = (
        Index("ix_books_title", "title"),
    )
