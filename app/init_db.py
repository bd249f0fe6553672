"""Create the links table on the configured database.

Usage:
    python app/init_db.py

Reads DATABASE_URL / ENVIRONMENT from the environment or the project .env.
"""

import logging
import sys

import database
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

logging.basicConfig(level=logging.INFO, format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s")
logger = logging.getLogger("tinylink.init_db")


def main() -> int:
    logger.info("Connecting to %s", database.engine.url.render_as_string(hide_password=True))
    try:
        with database.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        database.init_db()
    except SQLAlchemyError:
        logger.exception("Database initialisation failed")
        return 1
    logger.info("Table 'links' is ready")
    return 0


if __name__ == "__main__":
    sys.exit(main())
