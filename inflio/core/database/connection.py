# File: inflio/core/database/connection.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from inflio.core.config.settings import settings

# check_same_thread=False is needed only for SQLite
connect_args = {"check_same_thread": False} if "sqlite" in settings.DATABASE_URL else {}

engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
    connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency for obtaining a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Creates every registered table. Safe to call repeatedly."""
    from inflio.core.database.base import Base
    import inflio.features.transcript.data.sql_models  # noqa: F401
    import inflio.features.personas.data.sql_models  # noqa: F401

    Base.metadata.create_all(bind=engine)
