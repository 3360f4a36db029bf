"""Create the schema and load the sample specialties and doctors.

Usage:
    python -m backend.init_db
"""
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from backend.core import config
from backend.database import Database
from backend.seed import seed_sample_data

logger = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(level=config.LOG_LEVEL)
    database = Database(config.DATABASE_URL)
    try:
        database.create_schema()
        with database.session() as db:
            specialties, doctors = seed_sample_data(db)
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')
        sys.exit(1)
    finally:
        database.dispose()

    print(f"Database ready: {specialties} specialties and {doctors} doctors added.")


if __name__ == "__main__":
    main()
