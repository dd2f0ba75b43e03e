"""Unit tests for handover.services.documents: opaque JSON payloads, last write wins."""

import json
import unittest
from datetime import UTC, datetime
from unittest.mock import MagicMock

from handover.models import Handover
from handover.services.documents import get_document, list_documents, put_document
from handover.services.errors import (
    InternalError,
    InvalidPayloadError,
    MissingFieldsError,
    NotFoundError,
)


class TestPutDocument(unittest.TestCase):
    """put_document serializes the payload and upserts it under the id."""

    def test_serializes_payload(self) -> None:
        store = MagicMock()
        payload = {"patients": [{"bed": 4, "notes": "stable"}], "shift": "night"}
        put_document(store, "ward-a", payload)
        document_id, data = store.upsert_document.call_args.args
        self.assertEqual(document_id, "ward-a")
        self.assertEqual(json.loads(data), payload)

    def test_non_object_payloads_are_allowed(self) -> None:
        store = MagicMock()
        put_document(store, "list", [1, 2, 3])
        self.assertEqual(store.upsert_document.call_args.args[1], "[1, 2, 3]")

    def test_size_limit(self) -> None:
        store = MagicMock()
        with self.assertRaises(InvalidPayloadError):
            put_document(store, "big", {"blob": "x" * 100}, max_bytes=50)
        store.upsert_document.assert_not_called()

    def test_blank_id(self) -> None:
        with self.assertRaises(MissingFieldsError):
            put_document(MagicMock(), " ", {})

    def test_overlong_id(self) -> None:
        store = MagicMock()
        with self.assertRaises(InvalidPayloadError):
            put_document(store, "h" * 300, {})
        store.upsert_document.assert_not_called()


class TestGetDocument(unittest.TestCase):
    """get_document decodes the stored payload or raises NotFoundError."""

    def test_found(self) -> None:
        updated = datetime(2026, 3, 1, tzinfo=UTC)
        store = MagicMock()
        store.find_document_by_id.return_value = Handover(
            id="ward-a", data='{"shift": "day"}', last_updated=updated
        )
        doc = get_document(store, "ward-a")
        self.assertEqual(doc.data, {"shift": "day"})
        self.assertEqual(doc.last_updated, updated)

    def test_not_found(self) -> None:
        store = MagicMock()
        store.find_document_by_id.return_value = None
        with self.assertRaises(NotFoundError):
            get_document(store, "missing")

    def test_overlong_id_is_not_found(self) -> None:
        store = MagicMock()
        with self.assertRaises(NotFoundError):
            get_document(store, "h" * 300)
        store.find_document_by_id.assert_not_called()

    def test_corrupt_stored_payload(self) -> None:
        store = MagicMock()
        store.find_document_by_id.return_value = Handover(
            id="bad", data="{not json", last_updated=datetime.now(UTC)
        )
        with self.assertRaises(InternalError):
            get_document(store, "bad")


class TestListDocuments(unittest.TestCase):
    """list_documents keeps the store's newest-first order."""

    def test_summaries(self) -> None:
        t1 = datetime(2026, 1, 1, tzinfo=UTC)
        t3 = datetime(2026, 1, 3, tzinfo=UTC)
        store = MagicMock()
        store.list_document_summaries.return_value = [("c", t3), ("a", t1)]
        self.assertEqual(
            [(d.id, d.last_updated) for d in list_documents(store)],
            [("c", t3), ("a", t1)],
        )


if __name__ == "__main__":
    unittest.main()
