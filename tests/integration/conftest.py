import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest
from psycopg.conninfo import make_conninfo

from billguard.config.settings import Settings
from billguard.database.connection import close_pool, get_connection, init_pool
from billguard.database.repositories.document_repository import DocumentRepository


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "billguard_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    conninfo = make_conninfo(
        host=test_settings.db_host,
        port=test_settings.db_port,
        dbname=test_settings.db_database,
        user=test_settings.db_username,
        password=test_settings.db_password,
        connect_timeout=3,
    )
    try:
        psycopg.connect(conninfo).close()
    except psycopg.Error as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    init_pool(test_settings)
    try:
        DocumentRepository().ensure_schema()
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def clean_documents(db_conn: psycopg.Connection[Any]) -> Generator[None, None, None]:
    with db_conn.cursor() as cur:
        cur.execute("DELETE FROM documents")
    db_conn.commit()
    yield
    with db_conn.cursor() as cur:
        cur.execute("DELETE FROM documents")
    db_conn.commit()
