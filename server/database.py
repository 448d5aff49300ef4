"""
Database initialization and helpers.
"""
import logging

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event

logger = logging.getLogger(__name__)

db = SQLAlchemy()


def init_db(app):
    """Initialize the database with the Flask app and create all tables."""
    db.init_app(app)
    with app.app_context():
        if db.engine.dialect.name == 'sqlite':
            @event.listens_for(db.engine, "connect")
            def set_sqlite_pragma(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.execute("PRAGMA synchronous=NORMAL")
                cursor.close()

        # Import models so they're registered
        import models  # noqa: F401
        db.create_all()
        logger.info("[DB] Database initialized at %s", app.config['SQLALCHEMY_DATABASE_URI'])
