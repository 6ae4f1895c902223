import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from eco_electric.config import get_settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def make_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        # handlers run on the threadpool, not the thread that opened the file
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True)


engine = make_engine(get_settings().database_url)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def init_db(bind: Engine = engine):
    """Create the storefront tables that do not exist yet."""
    Base.metadata.create_all(bind=bind)
    logger.info("Tables ready on %s", bind.url.render_as_string(hide_password=True))


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
