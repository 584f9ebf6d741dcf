import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import settings

logger = logging.getLogger(__name__)


def _build_engine(url: str):
    """Create an engine for the hosted Postgres (or a local SQLite file)."""
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(
        url,
        echo=settings.DEBUG,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


# Anonymous-role connection
engine = _build_engine(settings.DATABASE_URL)

# Service-role connection for admin writes
if settings.DATABASE_ADMIN_URL:
    admin_engine = _build_engine(settings.DATABASE_ADMIN_URL)
else:
    logger.warning("DATABASE_ADMIN_URL not set. Admin operations will use the regular connection.")
    admin_engine = engine

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
AdminSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=admin_engine)

# Base class for models
Base = declarative_base()
