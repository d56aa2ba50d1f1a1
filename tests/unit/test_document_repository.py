from datetime import datetime, timezone
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from psycopg.types.json import Jsonb

from billguard.analysis.models import StoredDocument
from billguard.analysis.serialization import document_from_payload, document_to_payload
from billguard.database.repositories.document_repository import DocumentRepository
from billguard.processor.exceptions import DocumentNotFoundError

_GET_CONNECTION = "billguard.database.repositories.document_repository.get_connection"


def _payload(document_id: str, title: str, category: str = "invoice") -> dict[str, Any]:
    return {
        "id": document_id,
        "fileName": f"{document_id}.jpg",
        "fileType": "image/jpeg",
        "fileSize": 100,
        "uploadedAt": "2026-01-13T10:00:00+00:00",
        "analyzedAt": "2026-01-13T10:00:05+00:00",
        "category": category,
        "title": title,
    }


def _mock_connection(mock_get_conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    """Wire up a mock connection + cursor and return (mock_conn, mock_cursor)."""
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


class TestEnsureSchema:
    @patch(_GET_CONNECTION)
    def test_creates_table_and_commits(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)

        DocumentRepository().ensure_schema()

        sql = mock_cursor.execute.call_args.args[0]
        assert "CREATE TABLE IF NOT EXISTS documents" in sql
        mock_conn.commit.assert_called_once()


class TestFindAll:
    @patch(_GET_CONNECTION)
    def test_returns_documents_in_row_order(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchall.return_value = [
            {"payload": _payload("doc_2", "Newer")},
            {"payload": _payload("doc_1", "Older")},
        ]

        result = DocumentRepository().find_all()

        assert [doc.id for doc in result] == ["doc_2", "doc_1"]
        assert result[0].analysis.title == "Newer"
        assert all(isinstance(doc, StoredDocument) for doc in result)

    @patch(_GET_CONNECTION)
    def test_orders_newest_first(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchall.return_value = []

        DocumentRepository().find_all()

        assert "ORDER BY uploaded_at DESC" in mock_cursor.execute.call_args.args[0]

    @patch(_GET_CONNECTION)
    def test_empty_library(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchall.return_value = []

        assert DocumentRepository().find_all() == []


class TestFindById:
    @patch(_GET_CONNECTION)
    def test_returns_document_when_found(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = {"payload": _payload("doc_1", "ACME invoice")}

        result = DocumentRepository().find_by_id("doc_1")

        assert result.id == "doc_1"
        assert result.file_name == "doc_1.jpg"
        assert result.analysis.category == "invoice"
        params = mock_cursor.execute.call_args.args[1]
        assert params == ("doc_1",)

    @patch(_GET_CONNECTION)
    def test_raises_document_not_found_when_missing(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        with pytest.raises(DocumentNotFoundError, match="Document doc_9 not found"):
            DocumentRepository().find_by_id("doc_9")


class TestFindByCategory:
    @patch(_GET_CONNECTION)
    def test_filters_by_category(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchall.return_value = [{"payload": _payload("doc_1", "Bill", "medical_bill")}]

        result = DocumentRepository().find_by_category("medical_bill")

        assert [doc.id for doc in result] == ["doc_1"]
        sql, params = mock_cursor.execute.call_args.args
        assert "WHERE category = %s" in sql
        assert params == ("medical_bill",)

    @patch(_GET_CONNECTION)
    def test_all_returns_whole_library(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchall.return_value = [
            {"payload": _payload("doc_2", "Lease", "real_estate")},
            {"payload": _payload("doc_1", "Bill", "medical_bill")},
        ]

        result = DocumentRepository().find_by_category("all")

        assert len(result) == 2
        assert "WHERE" not in mock_cursor.execute.call_args.args[0]


class TestSearch:
    @patch(_GET_CONNECTION)
    def test_filters_loaded_documents(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchall.return_value = [
            {"payload": _payload("doc_2", "Apartment lease")},
            {"payload": _payload("doc_1", "Hospital bill")},
        ]

        result = DocumentRepository().search("hospital")

        assert [doc.id for doc in result] == ["doc_1"]


class TestSave:
    @patch(_GET_CONNECTION)
    def test_upserts_payload_and_commits(
        self, mock_get_conn: MagicMock, stored_medical_bill: StoredDocument
    ) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)

        DocumentRepository().save(stored_medical_bill)

        sql, params = mock_cursor.execute.call_args.args
        assert "ON CONFLICT (id) DO UPDATE" in sql
        assert params[0] == stored_medical_bill.id
        assert params[1] == "medical_bill"
        assert isinstance(params[2], Jsonb)
        assert params[2].obj == document_to_payload(stored_medical_bill)
        assert params[3] == datetime(2026, 1, 13, 10, 0, tzinfo=timezone.utc)
        mock_conn.commit.assert_called_once()

    @patch(_GET_CONNECTION)
    def test_replace_keeps_upload_time(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        document = StoredDocument(
            id="doc_1",
            file_name="a.jpg",
            file_type="image/jpeg",
            file_size=1,
            uploaded_at="2026-01-13T10:00:00+00:00",
            analyzed_at="2026-01-13T10:00:05+00:00",
        )

        DocumentRepository().save(document)

        sql = mock_cursor.execute.call_args.args[0]
        update_clause = sql.split("DO UPDATE", 1)[1]
        assert "uploaded_at" not in update_clause

    @patch(_GET_CONNECTION)
    def test_missing_upload_time_falls_back_to_now(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        payload = _payload("doc_1", "Restored")
        del payload["uploadedAt"]
        document = document_from_payload(payload)
        before = datetime.now(timezone.utc)

        DocumentRepository().save(document)

        uploaded_at = mock_cursor.execute.call_args.args[1][3]
        assert uploaded_at.tzinfo is not None
        assert uploaded_at >= before


class TestDelete:
    @patch(_GET_CONNECTION)
    def test_returns_true_when_deleted(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 1

        assert DocumentRepository().delete("doc_1") is True
        assert mock_cursor.execute.call_args.args[1] == ("doc_1",)
        mock_conn.commit.assert_called_once()

    @patch(_GET_CONNECTION)
    def test_returns_false_when_missing(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 0

        assert DocumentRepository().delete("doc_9") is False


class TestLastUpdated:
    @patch(_GET_CONNECTION)
    def test_returns_max_updated_at(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        stamp = datetime(2026, 1, 13, 10, 0, tzinfo=timezone.utc)
        mock_cursor.fetchone.return_value = (stamp,)

        assert DocumentRepository().last_updated() == stamp

    @patch(_GET_CONNECTION)
    def test_empty_library(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = (None,)

        assert DocumentRepository().last_updated() is None
