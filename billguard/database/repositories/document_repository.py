from datetime import datetime, timezone

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from billguard.analysis.models import StoredDocument
from billguard.analysis.serialization import document_from_payload, document_to_payload
from billguard.database.connection import get_connection
from billguard.library.search import filter_documents
from billguard.processor.exceptions import DocumentNotFoundError

ALL_CATEGORIES = "all"

_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS documents (
    id TEXT PRIMARY KEY,
    category TEXT NOT NULL,
    payload JSONB NOT NULL,
    uploaded_at TIMESTAMPTZ NOT NULL,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
)
"""


class DocumentRepository:
    """Document library stored in the documents table, keyed by document id."""

    def ensure_schema(self) -> None:
        """Create the documents table if it does not exist."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(_SCHEMA_SQL)
            conn.commit()

    def find_all(self) -> list[StoredDocument]:
        """Return every stored document, most recently uploaded first."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT payload
                    FROM documents
                    ORDER BY uploaded_at DESC, id DESC
                    """
                )
                rows = cur.fetchall()
        return [document_from_payload(row["payload"]) for row in rows]

    def find_by_id(self, document_id: str) -> StoredDocument:
        """Find a stored document by id.

        Raises:
            DocumentNotFoundError: if no document with this id exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    "SELECT payload FROM documents WHERE id = %s",
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return document_from_payload(row["payload"])

    def find_by_category(self, category: str) -> list[StoredDocument]:
        """Return documents of one category; ``all`` returns the whole library."""
        if category == ALL_CATEGORIES:
            return self.find_all()
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT payload
                    FROM documents
                    WHERE category = %s
                    ORDER BY uploaded_at DESC, id DESC
                    """,
                    (category,),
                )
                rows = cur.fetchall()
        return [document_from_payload(row["payload"]) for row in rows]

    def search(self, query: str) -> list[StoredDocument]:
        """Return documents containing every word of ``query``."""
        return filter_documents(self.find_all(), query)

    def save(self, document: StoredDocument) -> None:
        """Insert a document, or replace the stored one with the same id.

        A replaced document keeps its original upload time, and so its
        position in the library.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO documents (id, category, payload, uploaded_at)
                    VALUES (%s, %s, %s, %s)
                    ON CONFLICT (id) DO UPDATE
                    SET category = EXCLUDED.category,
                        payload = EXCLUDED.payload,
                        updated_at = now()
                    """,
                    (
                        document.id,
                        document.analysis.category,
                        Jsonb(document_to_payload(document)),
                        _upload_time(document.uploaded_at),
                    ),
                )
            conn.commit()

    def delete(self, document_id: str) -> bool:
        """Delete a document by id. Returns False if it did not exist."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM documents WHERE id = %s", (document_id,))
                deleted = cur.rowcount > 0
            conn.commit()
        return deleted

    def last_updated(self) -> datetime | None:
        """Time of the most recent insert or replace, None for an empty library."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT max(updated_at) FROM documents")
                row = cur.fetchone()
        if row is None:
            return None
        return row[0]


def _upload_time(value: str) -> datetime:
    """Parse a stored upload timestamp; documents without one sort as uploaded now."""
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return datetime.now(timezone.utc)
