"""Handover documents: opaque JSON payloads stored whole under an id, last write wins."""

import json
import logging
from typing import Any

from handover.schemas.handover import HandoverResponse, HandoverSummary
from handover.services.errors import (
    InternalError,
    InvalidPayloadError,
    MissingFieldsError,
    NotFoundError,
    store_errors,
)
from handover.services.store import Store

logger = logging.getLogger(__name__)

DOCUMENT_ID_MAX_LEN = 255


def _check_id(document_id: str) -> str:
    if not document_id or not document_id.strip():
        raise MissingFieldsError("Handover id is required.")
    return document_id


def get_document(store: Store, document_id: str) -> HandoverResponse:
    document_id = _check_id(document_id)
    if len(document_id) > DOCUMENT_ID_MAX_LEN:
        # Longer ids are rejected on write, so nothing can be stored under one.
        raise NotFoundError("Handover not found.")
    with store_errors("get handover"):
        document = store.find_document_by_id(document_id)
    if document is None:
        raise NotFoundError("Handover not found.")
    try:
        data = json.loads(document.data)
    except json.JSONDecodeError as e:
        logger.error("Stored handover is not valid JSON", extra={"handover_id": document_id})
        raise InternalError() from e
    return HandoverResponse(id=document.id, data=data, last_updated=document.last_updated)


def put_document(
    store: Store,
    document_id: str,
    payload: Any,
    max_bytes: int | None = None,
) -> None:
    """Serialize payload and replace whatever is stored under document_id."""
    document_id = _check_id(document_id)
    if len(document_id) > DOCUMENT_ID_MAX_LEN:
        raise InvalidPayloadError(f"Handover id must be at most {DOCUMENT_ID_MAX_LEN} characters.")
    data = json.dumps(payload)
    if max_bytes is not None and len(data.encode("utf-8")) > max_bytes:
        raise InvalidPayloadError(f"Handover payload must not exceed {max_bytes} bytes.")
    with store_errors("put handover"):
        store.upsert_document(document_id, data)
    logger.info("Saved handover", extra={"handover_id": document_id, "size": len(data)})


def list_documents(store: Store) -> list[HandoverSummary]:
    """Return id and last_updated for every document, most recently updated first."""
    with store_errors("list handovers"):
        rows = store.list_document_summaries()
    return [HandoverSummary(id=doc_id, last_updated=updated) for doc_id, updated in rows]
