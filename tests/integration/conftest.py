import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from casedocs.config.settings import Settings
from casedocs.database.connection import close_pool, get_connection, init_pool
from casedocs.database.models import NewDocument
from casedocs.database.repositories.documents_repository import DocumentsRepository
from casedocs.integrity.hashing import hash_bytes
from casedocs.processor.models import TEXT_MIME_TYPE, Document

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "sql" / "schema.sql"


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "casedocs_test")
    return Settings(storage_backend="local")


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute(SCHEMA_PATH.read_text())
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[str], None, None]:
    document_ids: list[str] = []
    yield document_ids
    if not document_ids:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for document_id in document_ids:
                cur.execute("DELETE FROM audit_logs WHERE resource_id = %s", (document_id,))
                cur.execute("DELETE FROM documents WHERE id = %s", (document_id,))
        conn.commit()


@pytest.fixture
def files_root(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture
def seed_text_document(
    integration_cleanup: list[str],
    files_root: Path,
) -> Document:
    data = b"Hello"
    storage_key = "firm-1/user-1/note.txt"
    path = files_root / storage_key
    path.parent.mkdir(parents=True)
    path.write_bytes(data)

    document = DocumentsRepository().create(
        NewDocument(
            file_name="note.txt",
            file_size=len(data),
            mime_type=TEXT_MIME_TYPE,
            storage_key=storage_key,
            file_hash=hash_bytes(data),
            uploaded_by="user-1",
        )
    )
    integration_cleanup.append(document.id)
    return document
