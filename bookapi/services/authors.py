"""
Author reads and mutations.

Reads go through the tagged cache and return serialized JSON text, so an
unchanged author serializes to the same bytes every time. Mutations validate
the resulting author, commit with a single DBStorage.save() and only then
invalidate cache tags.
"""
from __future__ import annotations

import json
import logging
from typing import Callable

from marshmallow import ValidationError

from bookapi.models.author import Author
from bookapi.models.schemas.author import (
    AuthorInSchema,
    AuthorOutSchema,
    AuthorDetailSchema,
)
from bookapi.services.exceptions import NotFoundError
from bookapi.utils.cache import AUTHORS_TAG, BOOKS_TAG, list_key, detail_key

logger = logging.getLogger(__name__)

in_schema = AuthorInSchema()
out_list_schema = AuthorOutSchema(many=True)
out_schema = AuthorOutSchema()
detail_schema = AuthorDetailSchema()


class AuthorService:
    resource = "Author"

    def __init__(self, storage, cache, dumps: Callable[[object], str] = json.dumps):
        self.storage = storage
        self.cache = cache
        self.dumps = dumps

    def _get_or_404(self, author_id) -> Author:
        author = self.storage.get(Author, author_id)
        if author is None:
            raise NotFoundError(self.resource, author_id)
        return author

    # Reads

    def list(self, page: int, limit: int) -> str:
        def compute():
            rows = self.storage.page(Author, page, limit)
            total = self.storage.count(Author)
            return self.dumps(
                {
                    "data": out_list_schema.dump(rows),
                    "meta": {"page": page, "limit": limit, "total": total},
                }
            )

        return self.cache.remember(AUTHORS_TAG, list_key(self.resource, page, limit), compute)

    def detail(self, author_id: int) -> str:
        def compute():
            author = self._get_or_404(author_id)
            data = detail_schema.dump(
                {
                    "id": author.id,
                    "last_name": author.last_name,
                    "first_name": author.first_name,
                    "books": self.storage.books_of(author.id),
                }
            )
            return self.dumps({"data": data})

        return self.cache.remember(AUTHORS_TAG, detail_key(self.resource, author_id), compute)

    # Mutations

    def create(self, payload) -> dict:
        data = in_schema.load(payload)
        author = Author(last_name=data["last_name"], first_name=data["first_name"])
        self.storage.new(author)
        self.storage.save()
        # A fresh author owns no books, book payloads are unaffected
        self.cache.invalidate(AUTHORS_TAG)
        return out_schema.dump(author)

    def update(self, author_id: int, payload) -> None:
        author = self._get_or_404(author_id)
        if not isinstance(payload, dict):
            raise ValidationError({"_schema": ["Invalid input type."]})
        # Fields present in the payload replace the stored ones; validate the result
        data = in_schema.load({**in_schema.dump(author), **payload})
        author.last_name = data["last_name"]
        author.first_name = data["first_name"]
        self.storage.new(author)
        self.storage.save()
        # Book payloads embed their author's names
        self.cache.invalidate(AUTHORS_TAG, BOOKS_TAG)

    def delete(self, author_id: int) -> None:
        author = self._get_or_404(author_id)
        books = self.storage.books_of(author.id)
        for book in books:
            self.storage.delete(book)
        self.storage.delete(author)
        self.storage.save()
        if books:
            logger.info("author %s deleted with %d book(s)", author_id, len(books))
            self.cache.invalidate(AUTHORS_TAG, BOOKS_TAG)
        else:
            self.cache.invalidate(AUTHORS_TAG)
