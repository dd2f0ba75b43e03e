"""Handover document endpoints: any authenticated session may read and write."""

import json
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request

from handover.api.v1.auth import get_current_session, get_store
from handover.core.config import Settings, get_settings
from handover.schemas.auth import AckResponse, SessionView
from handover.schemas.handover import HandoverListResponse, HandoverResponse
from handover.services import documents
from handover.services.errors import InvalidPayloadError, MissingFieldsError
from handover.services.store import Store

router = APIRouter()


@router.get("", response_model=HandoverListResponse)
def list_handovers(
    _user: Annotated[SessionView, Depends(get_current_session)],
    store: Annotated[Store, Depends(get_store)],
) -> HandoverListResponse:
    """List handover ids with their last update time, newest first."""
    return HandoverListResponse(handovers=documents.list_documents(store))


@router.get("/{handover_id}", response_model=HandoverResponse)
def get_handover(
    handover_id: str,
    _user: Annotated[SessionView, Depends(get_current_session)],
    store: Annotated[Store, Depends(get_store)],
) -> HandoverResponse:
    return documents.get_document(store, handover_id)


async def _read_json_body(request: Request, max_bytes: int) -> Any:
    """Decode the raw body as any JSON value, including null and bare scalars."""
    raw = await request.body()
    if not raw.strip():
        raise MissingFieldsError("Handover payload is required.")
    if len(raw) > max_bytes:
        raise InvalidPayloadError(f"Handover payload must not exceed {max_bytes} bytes.")
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidPayloadError(f"Invalid JSON: {e!s}") from e


@router.put("/{handover_id}", response_model=AckResponse)
async def put_handover(
    handover_id: str,
    request: Request,
    _user: Annotated[SessionView, Depends(get_current_session)],
    store: Annotated[Store, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AckResponse:
    """
    Store the request body as the handover document, replacing any previous version.

    The body is kept as opaque JSON. There is no version check: the last write wins.
    """
    payload = await _read_json_body(request, settings.MAX_DOCUMENT_BYTES)
    documents.put_document(store, handover_id, payload, max_bytes=settings.MAX_DOCUMENT_BYTES)
    return AckResponse()
