import logging

from flask import Flask
from flask_cors import CORS

from .config import get_config
from .errors import register_error_handlers
from bookapi import __version__
from bookapi.fixtures import seed_command
from bookapi.models import DBStorage
from bookapi.services import AuthorService, BookService
from bookapi.utils.cache import TaggedCache


def create_app(config_name: str | None = None) -> Flask:
    """
    Application factory: creates and configures the Flask app.

    Storage, cache and services are built here and handed to each other
    explicitly; views reach them through app.extensions.
    """
    app = Flask(__name__)

    # Load configuration (reads .env via get_config)
    app.config.from_object(get_config(config_name))
    logging.basicConfig(level=app.config["LOG_LEVEL"])

    # Cross-Origin Resource Sharing: enable for dev, configurable for prod
    CORS(app, resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    # Uniform error envelope
    register_error_handlers(app)

    storage = DBStorage(app.config["DATABASE_URL"], echo=app.config["SQLALCHEMY_ECHO"])
    storage.reload()

    cache = TaggedCache(maxsize=app.config["CACHE_MAXSIZE"], ttl=app.config["CACHE_DEFAULT_TIMEOUT"])

    app.extensions["storage"] = storage
    app.extensions["tagged_cache"] = cache
    app.extensions["author_service"] = AuthorService(storage, cache, dumps=app.json.dumps)
    app.extensions["book_service"] = BookService(storage, cache, dumps=app.json.dumps)

    from .health import bp as health_bp
    from .authors import bp as authors_bp
    from .books import bp as books_bp
    from .auth import bp as auth_bp

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(authors_bp, url_prefix="/api")
    app.register_blueprint(books_bp, url_prefix="/api")
    app.register_blueprint(auth_bp, url_prefix="/api")

    app.cli.add_command(seed_command)

    # Ensure the DB session is removed at the end of each request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        # This calls scoped_session.remove(), preventing connection leaks
        storage.close()

    @app.route("/")
    def root():
        return {
            "message": "Welcome to Book API",
            "version": __version__,
            "health": "/api/health",
        }, 200

    return app
