from bookapi.models.base_model import Base, MAX_ID
from bookapi.models.book import Book
from bookapi.models.author import Author
from bookapi.models.user import User
from sqlalchemy import create_engine, event
from sqlalchemy.orm import scoped_session, sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

# Map model names for easy querying
classes = {
    "Book": Book,
    "Author": Author,
    "User": User,
}


class DBStorage:
    __engine = None
    __session = None

    def __init__(self, database_url: str, echo: bool = False):
        """Initialize engine from a SQLAlchemy database URL"""
        options = {"echo": echo}
        if database_url.startswith("sqlite"):
            options["connect_args"] = {"check_same_thread": False}
            if database_url in ("sqlite://", "sqlite:///:memory:"):
                # One shared connection, otherwise every session sees its own empty database
                options["poolclass"] = StaticPool
        else:
            options["pool_pre_ping"] = True
        self.__engine = create_engine(database_url, **options)

        # Enable SQLite foreign keys
        if self.__engine.url.get_backend_name() == "sqlite":
            @event.listens_for(self.__engine, "connect")
            def _set_sqlite_pragma(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

    def reload(self):
        """Create tables and start session"""
        Base.metadata.create_all(self.__engine)
        session_factory = sessionmaker(bind=self.__engine, expire_on_commit=False)
        Session = scoped_session(session_factory)
        self.__session = Session

    def drop_all(self):
        """Drop every table (tests only)"""
        Base.metadata.drop_all(self.__engine)

    def all(self, cls):
        """All rows of cls, ordered by id"""
        return self.__session.query(cls).order_by(cls.id).all()

    def page(self, cls, page: int, limit: int):
        """
        The limit-sized slice of cls starting at (page - 1) * limit, ordered by id.
        A page past the end of the data is an empty list.
        """
        if page < 1 or limit < 1:
            raise ValueError("page and limit must be >= 1")
        return (
            self.__session.query(cls)
            .order_by(cls.id)
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )

    def books_of(self, author_id):
        """Books currently owned by the author"""
        return (
            self.__session.query(Book)
            .filter(Book.author_id == author_id)
            .order_by(Book.id)
            .all()
        )

    def new(self, obj):
        """Add object to session"""
        self.__session.add(obj)

    def save(self):
        """Commit session"""
        try:
            self.__session.commit()
        except SQLAlchemyError:
            self.__session.rollback()
            raise

    def delete(self, obj=None):
        """Delete object if exists (hard delete)"""
        if obj:
            self.__session.delete(obj)

    def get(self, cls, id):
        """Fetch one object by class and ID; ids no row can hold resolve to None"""
        if cls not in classes.values():
            return None
        if not 0 < id <= MAX_ID:
            return None
        return self.__session.get(cls, id)

    def count(self, cls):
        """Count rows of cls"""
        return self.__session.query(cls).count()

    def close(self):
        """Remove session (for API teardown)"""
        self.__session.remove()

    # expose the SQLAlchemy session for advanced querying (joins, filters, etc.)
    def get_session(self):
        return self.__session
