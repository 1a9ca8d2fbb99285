# database.py

import logging
from contextlib import contextmanager

from flask_sqlalchemy import SQLAlchemy

logger = logging.getLogger(__name__)

# Initialize SQLAlchemy without an app yet. create_app() calls init_app later.
db = SQLAlchemy()


def init_db(app):
    """
    Creates the tables for every registered model if they don't exist.
    Models must be imported before this is called.
    """
    with app.app_context():
        logger.info(f"Ensuring tables at {app.config['SQLALCHEMY_DATABASE_URI']}...")
        db.create_all()
        logger.info("Tables ensured.")


@contextmanager
def get_db_session():
    """
    Provides the request-scoped SQLAlchemy session.
    Rolls back and re-raises on error; callers commit explicitly.
    """
    session = db.session
    try:
        yield session
    except Exception as e:
        logger.error(f"Database session error: {str(e)}")
        logger.error(f"Error type: {type(e).__name__}")
        session.rollback()
        raise
