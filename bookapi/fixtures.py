"""
Demo data: two users, ten authors and twenty books spread over them.

    flask --app bookapi.api seed
"""
from __future__ import annotations

import random

import click
from flask import current_app
from flask.cli import with_appcontext

from bookapi.models import Author, Book, User
from bookapi.utils.cache import AUTHORS_TAG, BOOKS_TAG
from bookapi.utils.security import hash_password

DEFAULT_PASSWORD = "test"


def seed(storage, authors: int = 10, books: int = 20, password: str = DEFAULT_PASSWORD, rng=None):
    """Load the demo users, authors and books in one commit."""
    rng = rng or random.Random()

    storage.new(User(email="user@bookapi.com", password_hash=hash_password(password), roles=["user"]))
    storage.new(User(email="admin@bookapi.com", password_hash=hash_password(password), roles=["admin"]))

    author_list = []
    for i in range(authors):
        author = Author(first_name=f"FirstName {i}", last_name=f"LastName {i}")
        storage.new(author)
        author_list.append(author)

    for i in range(books):
        storage.new(
            Book(
                title=f"Title {i}",
                cover_text=f"Back cover text number {i}",
                author=rng.choice(author_list) if author_list else None,
            )
        )
    storage.save()


@click.command("seed")
@click.option("--authors", default=10, show_default=True, help="Number of authors to create.")
@click.option("--books", default=20, show_default=True, help="Number of books to create.")
@with_appcontext
def seed_command(authors: int, books: int):
    """Load demo users, authors and books."""
    seed(current_app.extensions["storage"], authors=authors, books=books)
    current_app.extensions["tagged_cache"].invalidate(AUTHORS_TAG, BOOKS_TAG)
    click.echo(f"Seeded 2 users, {authors} authors and {books} books.")
