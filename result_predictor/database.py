from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from result_predictor.settings import settings

# Base for models
Base = declarative_base()


def build_engine(db_url: str):
    """
    Create the SQLAlchemy engine for the record store.

    SQLite connections are shared across FastAPI's worker threads, and an
    in-memory SQLite URL keeps a single connection so every session sees
    the same tables.
    """
    if not db_url.startswith("sqlite"):
        return create_engine(db_url)

    if db_url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            db_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_engine(db_url, connect_args={"check_same_thread": False})


engine = build_engine(settings.DB_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """Create the record store tables if they do not exist yet."""
    # Import models so they register on Base.metadata
    from result_predictor.models import prediction  # noqa: F401

    Base.metadata.create_all(bind=engine)


# Dependency to get a DB session
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
