"""
DBStorage: paging, lookups and the unit of work.
"""
import math

import pytest
from sqlalchemy.exc import IntegrityError

from bookapi.models import Author, Book, DBStorage


@pytest.fixture
def db():
    storage = DBStorage("sqlite://")
    storage.reload()
    yield storage
    storage.close()
    storage.drop_all()


def add_authors(db, n):
    authors = [Author(last_name=f"LastName {i}") for i in range(n)]
    for author in authors:
        db.new(author)
    db.save()
    return [a.id for a in authors]


class TestPaging:
    @pytest.mark.parametrize("limit", [1, 3, 7, 10])
    def test_pages_cover_every_row_once_in_order(self, db, limit):
        ids = add_authors(db, 7)

        seen = []
        for page in range(1, math.ceil(len(ids) / limit) + 1):
            seen.extend(a.id for a in db.page(Author, page, limit))

        assert seen == sorted(ids)

    def test_page_slice(self, db):
        ids = add_authors(db, 5)

        assert [a.id for a in db.page(Author, 2, 2)] == ids[2:4]

    def test_page_past_the_end_is_empty(self, db):
        add_authors(db, 3)

        assert db.page(Author, 5, 3) == []

    def test_page_and_limit_must_be_positive(self, db):
        with pytest.raises(ValueError):
            db.page(Author, 0, 3)
        with pytest.raises(ValueError):
            db.page(Author, 1, 0)


class TestLookups:
    def test_get_and_all(self, db):
        ids = add_authors(db, 3)

        assert db.get(Author, ids[1]).last_name == "LastName 1"
        assert db.get(Author, 999) is None
        assert db.get(Author, 10 ** 20) is None
        assert db.get(Author, 0) is None
        assert [a.id for a in db.all(Author)] == ids

    def test_books_of(self, db):
        author_id, other_id = add_authors(db, 2)
        for title, owner in [("A", author_id), ("B", other_id), ("C", author_id), ("D", None)]:
            db.new(Book(title=title, author_id=owner))
        db.save()

        assert [b.title for b in db.books_of(author_id)] == ["A", "C"]

    def test_ids_are_assigned_on_save(self, db):
        author = Author(last_name="Camus")
        db.new(author)
        assert author.id is None

        db.save()

        assert isinstance(author.id, int)


class TestUnitOfWork:
    def test_failed_save_rolls_back_everything(self, db):
        db.new(Author(last_name="Kept"))
        db.save()

        db.new(Author(last_name="Staged"))
        db.new(Book(title="Orphan", author_id=12345))  # foreign key violation
        with pytest.raises(IntegrityError):
            db.save()

        assert [a.last_name for a in db.all(Author)] == ["Kept"]
        assert db.count(Book) == 0
