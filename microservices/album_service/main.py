"""
Album Microservice

CRUD API over the album collection, plus score history appends.
Every response is a JSON envelope: {ok, data?, msg?, error?}

Port: 3000 (ALBUM_SERVICE_PORT / PORT)
"""

import json
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from http import HTTPStatus
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import get_settings
from core.logger import setup_service_logger

from .album_service import AlbumService
from .factory import create_album_service
from .models import AlbumEnvelope, AlbumServiceStatus
from .protocols import (
    AlbumCollectionEmptyError,
    AlbumNotFoundError,
    AlbumServiceError,
    AlbumValidationError,
    DuplicateAlbumError,
    InvalidAlbumIdError,
    RequestBodyTooLargeError,
)
from .validators import (
    AlbumValidationResult,
    MANDATORY_FIELDS_MESSAGE,
    ScoreValidationResult,
    validate_album_body,
    validate_score_body,
)

# Initialize configuration
settings = get_settings()
service_config = settings.service

# Setup loggers
logger = setup_service_logger("microservices.album_service", level=settings.logging.log_level)

# Global service instance
album_service: Optional[AlbumService] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management"""
    global album_service

    logger.info("Starting Album Service...")

    album_service = create_album_service(settings)

    # Open the pool and make sure the table and unique index exist
    try:
        await album_service.repo.initialize()
    except Exception as e:
        logger.error(f"Failed to connect to database: {e}")
        raise RuntimeError("Database connection failed") from e

    logger.info(f"Album Service started on port {service_config.service_port}")

    yield

    # Cleanup
    try:
        await album_service.repo.close()
        logger.info("Database pool closed")
    except Exception as e:
        logger.error(f"Error closing database pool: {e}")

    logger.info("Album Service stopped")


# Initialize FastAPI app
app = FastAPI(
    title="Album Service",
    description="Album collection management with score history",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=service_config.cors.allow_origins,
    allow_methods=service_config.cors.allow_methods,
    allow_headers=service_config.cors.allow_headers,
    max_age=service_config.cors.max_age,
)


# ==================== Envelope Helpers ====================


def envelope_response(
    status_code: int,
    ok: bool,
    data: Any = None,
    msg: Optional[str] = None,
    error: Any = None,
) -> JSONResponse:
    """Wrap a result in the standard response envelope"""
    envelope = AlbumEnvelope(ok=ok, data=data, msg=msg, error=error)
    return JSONResponse(content=envelope.to_content(), status_code=status_code)


def _reject_constant(token: str):
    # NaN / Infinity / -Infinity are not JSON
    raise ValueError(f"Non-standard JSON constant: {token}")


async def _read_json_body(request: Request) -> Any:
    """Parsed JSON body, {} when empty, None when it is not valid JSON"""
    limit = service_config.max_body_bytes
    chunks = []
    received = 0
    # Chunked requests carry no Content-Length, so count while reading
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            raise RequestBodyTooLargeError(limit)
        chunks.append(chunk)

    raw = b"".join(chunks)
    if not raw:
        return {}
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        logger.warning(f"Malformed JSON body on {request.method} {request.url.path}")
        return None


# ==================== Middleware ====================


@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    """Reject bodies whose declared length exceeds the configured limit"""
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > service_config.max_body_bytes:
        return envelope_response(
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            ok=False,
            msg=str(RequestBodyTooLargeError(service_config.max_body_bytes)),
        )
    return await call_next(request)


# ==================== Dependency Injection ====================


def get_album_service() -> AlbumService:
    """Get album service instance"""
    if album_service is None:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return album_service


async def get_album_validation(request: Request) -> AlbumValidationResult:
    """Validate a create/update body into an explicit result"""
    return validate_album_body(await _read_json_body(request))


async def get_score_validation(request: Request) -> ScoreValidationResult:
    """Validate a score-append body into an explicit result"""
    return validate_score_body(await _read_json_body(request))


# ==================== Error Handlers ====================


@app.exception_handler(AlbumValidationError)
async def validation_error_handler(request: Request, exc: AlbumValidationError):
    return envelope_response(status.HTTP_400_BAD_REQUEST, ok=False, msg=str(exc))


@app.exception_handler(InvalidAlbumIdError)
async def invalid_id_error_handler(request: Request, exc: InvalidAlbumIdError):
    return envelope_response(status.HTTP_400_BAD_REQUEST, ok=False, msg=str(exc))


@app.exception_handler(DuplicateAlbumError)
async def duplicate_error_handler(request: Request, exc: DuplicateAlbumError):
    return envelope_response(status.HTTP_400_BAD_REQUEST, ok=False, msg=str(exc))


@app.exception_handler(RequestBodyTooLargeError)
async def body_too_large_error_handler(request: Request, exc: RequestBodyTooLargeError):
    logger.warning(f"Oversized body rejected on {request.method} {request.url.path}")
    return envelope_response(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, ok=False, msg=str(exc))


@app.exception_handler(AlbumNotFoundError)
async def not_found_error_handler(request: Request, exc: AlbumNotFoundError):
    return envelope_response(status.HTTP_404_NOT_FOUND, ok=False, msg=str(exc))


@app.exception_handler(AlbumCollectionEmptyError)
async def empty_collection_error_handler(request: Request, exc: AlbumCollectionEmptyError):
    return envelope_response(status.HTTP_404_NOT_FOUND, ok=False, msg=str(exc))


@app.exception_handler(AlbumServiceError)
async def service_error_handler(request: Request, exc: AlbumServiceError):
    return envelope_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ok=False,
        msg=HTTPStatus.INTERNAL_SERVER_ERROR.phrase,
        error=str(exc),
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return envelope_response(exc.status_code, ok=False, msg=str(exc.detail))


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
    return envelope_response(status.HTTP_400_BAD_REQUEST, ok=False, msg=MANDATORY_FIELDS_MESSAGE)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global fallback; only reached when no response has been started"""
    logger.error(f"Unhandled exception in {request.url}: {exc}", exc_info=True)
    return envelope_response(status.HTTP_500_INTERNAL_SERVER_ERROR, ok=False, msg=str(exc))


# ==================== Health Check ====================


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    db_connected = album_service is not None and await album_service.check_connection()
    health = AlbumServiceStatus(
        service=service_config.service_name,
        status="healthy" if db_connected else "unhealthy",
        database_connected=db_connected,
        timestamp=datetime.now(),
    )
    status_code = 200 if db_connected else 503
    return JSONResponse(content=health.model_dump(mode="json"), status_code=status_code)


# ==================== Album Management ====================

router = APIRouter(prefix=service_config.base_path, tags=["album"])


@router.get("/")
async def get_albums(service: AlbumService = Depends(get_album_service)):
    """Retrieve every album"""
    albums = await service.list_albums()
    return envelope_response(status.HTTP_200_OK, ok=True, data=albums)


@router.get("/{album_id}")
async def get_album_by_id(album_id: str, service: AlbumService = Depends(get_album_service)):
    """Retrieve an album by its ID"""
    album = await service.get_album(album_id)
    return envelope_response(status.HTTP_200_OK, ok=True, data=album)


@router.post("/")
async def add_album(
    validation: AlbumValidationResult = Depends(get_album_validation),
    service: AlbumService = Depends(get_album_service),
):
    """Add a new album"""
    album = await service.create_album(validation)
    return envelope_response(status.HTTP_201_CREATED, ok=True, data=album)


@router.put("/update-score/{album_id}")
async def update_album_score_by_id(
    album_id: str,
    validation: ScoreValidationResult = Depends(get_score_validation),
    service: AlbumService = Depends(get_album_service),
):
    """Append a value to an album's score history"""
    album = await service.update_album_score(album_id, validation)
    return envelope_response(status.HTTP_200_OK, ok=True, data=album)


@router.put("/{album_id}")
async def update_album_by_id(
    album_id: str,
    validation: AlbumValidationResult = Depends(get_album_validation),
    service: AlbumService = Depends(get_album_service),
):
    """Update an album by its ID"""
    result = await service.update_album(album_id, validation)
    if not result.modified:
        return envelope_response(
            status.HTTP_200_OK, ok=True, msg="No modifications have been made to the document."
        )
    return envelope_response(status.HTTP_200_OK, ok=True, data=result.album)


@router.delete("/{album_id}")
async def delete_album_by_id(album_id: str, service: AlbumService = Depends(get_album_service)):
    """Remove an album by its ID"""
    await service.delete_album(album_id)
    return envelope_response(
        status.HTTP_200_OK,
        ok=True,
        msg=f"The document with ID {album_id} has been successfully deleted.",
    )


app.include_router(router)


# ==================== Run Server ====================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "microservices.album_service.main:app",
        host=service_config.service_host,
        port=service_config.service_port,
        log_level=settings.logging.log_level.lower(),
    )
