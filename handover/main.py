"""FastAPI application entrypoint. No business logic; only wiring, middleware and error mapping."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from handover.api.v1 import router as v1_router
from handover.core.config import settings
from handover.core.database import engine, init_db
from handover.core.logging import configure_logging
from handover.schemas.errors import ErrorResponse
from handover.services.errors import (
    InternalError,
    InvalidPayloadError,
    MissingFieldsError,
    ServiceError,
)

configure_logging(settings)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    init_db(engine, settings)
    yield


app = FastAPI(
    title="Handover API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(error: ServiceError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if error.status_code == 401 else None
    return JSONResponse(
        status_code=error.status_code,
        content=ErrorResponse(error=error.kind, message=error.message).model_dump(),
        headers=headers,
    )


@app.exception_handler(ServiceError)
async def service_error_handler(_request: Request, exc: ServiceError) -> JSONResponse:
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed or missing request fields are a 400, not FastAPI's default 422."""
    errors = exc.errors()
    fields = sorted(
        {".".join(str(p) for p in err.get("loc", ())[1:]) for err in errors} - {""}
    )
    if errors and all(err.get("type") == "missing" for err in errors):
        return _error_response(MissingFieldsError())
    message = "Invalid request body."
    if fields:
        message = f"Invalid request fields: {', '.join(fields)}."
    return _error_response(InvalidPayloadError(message))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(InternalError())


app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


if settings.STATIC_DIR and Path(settings.STATIC_DIR).is_dir():
    app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")
else:

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Handover API"}
