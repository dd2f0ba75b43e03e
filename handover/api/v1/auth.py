"""Session login/logout/validate and auth dependencies (get_current_session, require_admin)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from handover.core.config import Settings, get_settings
from handover.core.database import get_db
from handover.schemas.auth import (
    AckResponse,
    LoginRequest,
    LoginResponse,
    SessionTokenRequest,
    SessionView,
)
from handover.services.auth import Authenticator, SessionValidator
from handover.services.errors import ForbiddenError
from handover.services.store import SqlStore, Store

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_store(db: Annotated[Session, Depends(get_db)]) -> Store:
    """Dependency: the request's store handle."""
    return SqlStore(db)


def get_session_validator(
    store: Annotated[Store, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> SessionValidator:
    return SessionValidator(store, max_age_minutes=settings.SESSION_MAX_AGE_MINUTES)


def session_token_from_headers(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    x_session_id: Annotated[str | None, Header()] = None,
) -> str | None:
    """Dependency: token from 'Authorization: Bearer <token>' or the X-Session-Id header."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return x_session_id


def get_current_session(
    request: Request,
    token: Annotated[str | None, Depends(session_token_from_headers)],
    validator: Annotated[SessionValidator, Depends(get_session_validator)],
) -> SessionView:
    """Dependency: require a valid session and attach it to request.state.identity. Raises 401 otherwise."""
    identity = validator.validate(token)
    request.state.identity = identity
    return identity


def require_admin(
    current: Annotated[SessionView, Depends(get_current_session)],
) -> SessionView:
    """Dependency: require a session with role 'admin'. Raises 403 for non-admin."""
    if current.role != "admin":
        raise ForbiddenError()
    return current


def _token(body: SessionTokenRequest | None, header_token: str | None) -> str | None:
    if body is not None and body.session_id:
        return body.session_id
    return header_token


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    store: Annotated[Store, Depends(get_store)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns an opaque session token.
    Send it back as 'Authorization: Bearer <session_id>' or in the X-Session-Id header.
    """
    return Authenticator(store).login(body.username, body.password)


@router.post("/logout", response_model=AckResponse)
def logout(
    store: Annotated[Store, Depends(get_store)],
    header_token: Annotated[str | None, Depends(session_token_from_headers)],
    body: SessionTokenRequest | None = None,
) -> AckResponse:
    """End a session. Logging out an unknown session succeeds."""
    Authenticator(store).logout(_token(body, header_token))
    return AckResponse()


@router.get("/validate", response_model=SessionView)
def validate_session(
    current: Annotated[SessionView, Depends(get_current_session)],
) -> SessionView:
    """Return the session identified by the request headers."""
    return current


@router.post("/validate", response_model=SessionView)
def validate_session_body(
    request: Request,
    validator: Annotated[SessionValidator, Depends(get_session_validator)],
    header_token: Annotated[str | None, Depends(session_token_from_headers)],
    body: SessionTokenRequest | None = None,
) -> SessionView:
    """Same as GET /validate, but the token may also be sent as a session_id body field."""
    identity = validator.validate(_token(body, header_token))
    request.state.identity = identity
    return identity
