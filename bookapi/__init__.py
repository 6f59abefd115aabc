"""Book API: authors and books over Flask, SQLAlchemy and a tagged response cache."""

__version__ = "1.0.0"
