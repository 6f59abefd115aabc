"""
Book reads and mutations.

Book lists are cached, single books are not. Any mutation that touches a
book owned by an author also retires the author cache, since author details
list their books.
"""
from __future__ import annotations

import json
from typing import Callable, Optional

from marshmallow import ValidationError

from bookapi.models.author import Author
from bookapi.models.book import Book
from bookapi.models.schemas.book import BookInSchema, BookOutSchema
from bookapi.services.exceptions import NotFoundError
from bookapi.utils.cache import AUTHORS_TAG, BOOKS_TAG, list_key

in_schema = BookInSchema()
out_schema = BookOutSchema()
out_list_schema = BookOutSchema(many=True)


class BookService:
    resource = "Book"

    def __init__(self, storage, cache, dumps: Callable[[object], str] = json.dumps):
        self.storage = storage
        self.cache = cache
        self.dumps = dumps

    def _get_or_404(self, book_id) -> Book:
        book = self.storage.get(Book, book_id)
        if book is None:
            raise NotFoundError(self.resource, book_id)
        return book

    def _resolve_author(self, author_id: Optional[int]) -> Optional[Author]:
        # Unknown ids are not an error: the book simply has no author
        if author_id is None:
            return None
        return self.storage.get(Author, author_id)

    def _invalidate(self, *author_ids) -> None:
        if any(a is not None for a in author_ids):
            self.cache.invalidate(BOOKS_TAG, AUTHORS_TAG)
        else:
            self.cache.invalidate(BOOKS_TAG)

    # Reads

    def list(self, page: int, limit: int) -> str:
        def compute():
            rows = self.storage.page(Book, page, limit)
            total = self.storage.count(Book)
            return self.dumps(
                {
                    "data": out_list_schema.dump(rows),
                    "meta": {"page": page, "limit": limit, "total": total},
                }
            )

        return self.cache.remember(BOOKS_TAG, list_key(self.resource, page, limit), compute)

    def detail(self, book_id: int) -> str:
        book = self._get_or_404(book_id)
        return self.dumps({"data": out_schema.dump(book)})

    # Mutations

    def create(self, payload) -> dict:
        data = in_schema.load(payload)
        book = Book(
            title=data["title"],
            cover_text=data["cover_text"],
            author=self._resolve_author(data["author_id"]),
        )
        self.storage.new(book)
        self.storage.save()
        self._invalidate(book.author_id)
        return out_schema.dump(book)

    def update(self, book_id: int, payload) -> None:
        book = self._get_or_404(book_id)
        if not isinstance(payload, dict):
            raise ValidationError({"_schema": ["Invalid input type."]})
        previous_author_id = book.author_id
        current = {"title": book.title, "coverText": book.cover_text}
        # authorId is taken from the payload only: leaving it out detaches the author
        data = in_schema.load({**current, **payload})
        book.title = data["title"]
        book.cover_text = data["cover_text"]
        book.author = self._resolve_author(data["author_id"])
        self.storage.new(book)
        self.storage.save()
        self._invalidate(previous_author_id, book.author_id)

    def delete(self, book_id: int) -> None:
        book = self._get_or_404(book_id)
        author_id = book.author_id
        self.storage.delete(book)
        self.storage.save()
        self._invalidate(author_id)
