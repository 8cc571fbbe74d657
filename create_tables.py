"""
Create the companies and jobs tables on the configured database.
Run this with: python create_tables.py
"""
import sys

from sqlalchemy.exc import SQLAlchemyError

from jobly.core.database import init_db
from jobly.core.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def main() -> int:
    configure_logging()
    logger.info("Creating tables...")

    try:
        init_db()
    except SQLAlchemyError as e:
        logger.error(f"Table creation failed: {e}")
        logger.error("Check that the database is running and the connection settings are correct")
        return 1

    logger.info("All tables created")
    return 0


if __name__ == "__main__":
    sys.exit(main())
