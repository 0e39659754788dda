# File: tests/conftest.py

import os
import sys
import shutil
import tempfile
from pathlib import Path

import pytest

# 1. Add project root to path
sys.path.append(os.getcwd())

# 2. Default to a throwaway SQLite file unless a Postgres run is requested
_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="inflio_tests_"))
os.environ.setdefault("USE_SQLITE", "true")
os.environ.setdefault("SQLITE_URL", f"sqlite:///{_TEST_DB_DIR / 'test_inflio.db'}")

from sqlalchemy_utils import database_exists, create_database

from inflio.core.database.base import Base
from inflio.core.database.connection import engine, SessionLocal

TEST_ENGINE = engine
TestingSessionLocal = SessionLocal

@pytest.fixture(scope="session", autouse=True)
def global_setup():
    """
    Runs once per test session.
    Ensures the DB exists and every model is registered.
    """
    if not database_exists(TEST_ENGINE.url):
        create_database(TEST_ENGINE.url)

    import inflio.features.transcript.data.sql_models  # noqa: F401
    import inflio.features.personas.data.sql_models  # noqa: F401

    yield

    TEST_ENGINE.dispose()
    shutil.rmtree(_TEST_DB_DIR, ignore_errors=True)

@pytest.fixture(scope="function", autouse=True)
def setup_database(global_setup):
    """
    Creates the schema before EACH test and drops it afterwards.
    """
    Base.metadata.create_all(bind=TEST_ENGINE)
    yield
    Base.metadata.drop_all(bind=TEST_ENGINE)

@pytest.fixture
def db_session():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
