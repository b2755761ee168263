"""Create the widget layout schema: python -m app.db.migrate"""
import logging

from sqlalchemy.exc import SQLAlchemyError

from ..config import settings
from .models import Base

logger = logging.getLogger(__name__)


def run_migrations(bind=None) -> None:
    """Create all tables that do not exist yet"""
    if bind is None:
        from .session import engine
        bind = engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database migration completed successfully")


if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    try:
        run_migrations()
    except SQLAlchemyError:
        logger.exception("Migration failed")
        raise SystemExit(1)
