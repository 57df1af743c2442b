"""
Database initialization script
Creates the users and trips tables
"""
from app.database import init_db as create_tables, SQLALCHEMY_DATABASE_URL
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def init_db():
    """Initialize database with all tables"""
    try:
        logger.info("Creating all database tables...")
        create_tables()
        logger.info("✓ Database tables created successfully!")
        logger.info(f"Database: {SQLALCHEMY_DATABASE_URL.rsplit('@', 1)[-1]}")
        logger.info("You can now start the FastAPI server.")

    except Exception as e:
        logger.error(f"✗ Error initializing database: {str(e)}")
        raise


if __name__ == "__main__":
    init_db()
