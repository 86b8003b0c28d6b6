# create_db.py - Create the production sync tables (dev only; no migrations yet)
import logging
import sys
from pathlib import Path

# Add backend directory to Python path
backend_dir = Path(__file__).parent / "backend"
sys.path.insert(0, str(backend_dir))

from sqlalchemy import inspect

from app.core.config import settings
from app.core.logging import configure_logging
from app.db.base import Base
from app.db.session import engine
from app import models  # noqa: F401  registers every mapped table

logger = logging.getLogger("create_db")


def main() -> None:
    configure_logging()
    logger.info("Creating tables in %s", settings.SQLALCHEMY_DATABASE_URI)
    Base.metadata.create_all(bind=engine)

    tables = inspect(engine).get_table_names()
    logger.info("%d tables present: %s", len(tables), ", ".join(sorted(tables)))


if __name__ == "__main__":
    main()
