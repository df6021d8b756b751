#!/usr/bin/env python3
"""
Standalone database initialization script
Creates the menu planner tables at the configured DATABASE_URL
"""

import sys
import logging
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect  # noqa: E402

from app.config import settings  # noqa: E402
from domain.models import create_db_engine, init_database  # noqa: E402

logging.basicConfig(level=logging.INFO, format=settings.log_format)
logger = logging.getLogger("menuplanner.init_db")


def main() -> int:
    logger.info("Initializing database at %s", settings.database_url)
    engine = create_db_engine(settings.database_url, echo=settings.db_echo)
    try:
        init_database(engine)
        tables = inspect(engine).get_table_names()
        logger.info("Created %d tables: %s", len(tables), ", ".join(tables))
        return 0
    except Exception:
        logger.exception("Failed to initialize database")
        return 1
    finally:
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
