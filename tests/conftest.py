"""
Shared fixtures: a fresh app on an in-memory database per test, two users and
bearer headers for each of them.
"""
import pytest

from bookapi.api import create_app
from bookapi.models import Author, Book, User
from bookapi.utils.security import create_access_token, hash_password

PASSWORD = "correct-horse"


@pytest.fixture
def app():
    app = create_app("testing")
    yield app
    storage = app.extensions["storage"]
    storage.close()
    storage.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def storage(app):
    return app.extensions["storage"]


@pytest.fixture
def users(storage):
    admin = User(email="admin@bookapi.com", password_hash=hash_password(PASSWORD), roles=["admin"])
    user = User(email="user@bookapi.com", password_hash=hash_password(PASSWORD), roles=["user"])
    storage.new(admin)
    storage.new(user)
    storage.save()
    ids = {"admin": admin.id, "user": user.id}
    storage.close()
    return ids


def _headers(app, user_id, roles):
    with app.app_context():
        token = create_access_token(user_id, roles=roles)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(app, users):
    return _headers(app, users["admin"], ["admin"])


@pytest.fixture
def user_headers(app, users):
    return _headers(app, users["user"], ["user"])


@pytest.fixture
def make_author(storage):
    def _make(last_name="Hugo", first_name=None):
        author = Author(last_name=last_name, first_name=first_name)
        storage.new(author)
        storage.save()
        author_id = author.id
        storage.close()
        return author_id

    return _make


@pytest.fixture
def make_book(storage):
    def _make(title="Les Miserables", cover_text=None, author_id=None):
        book = Book(title=title, cover_text=cover_text, author_id=author_id)
        storage.new(book)
        storage.save()
        book_id = book.id
        storage.close()
        return book_id

    return _make
