"""HTTP surface for setlist-relay.

Run with:
    setlist-relay                                            # reads PORT, default 3000
    uvicorn setlist_relay.app:create_app --factory --reload  # dev server only
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Annotated, Any, Dict, Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, File, Request, UploadFile
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .audio import AudioIngestor, AudioTooLargeError, EmptyAudioError, IngestLimits
from .recognition import Matched, NoMatch, RecognitionOutcome, RecognitionService, UpstreamError
from .settings import Settings, load_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
NO_AUDIO_MESSAGE = "No audio file provided"
RECOGNITION_FAILED_MESSAGE = "Failed to recognize audio"
CORS_METHODS = ["GET", "POST", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization", "X-Requested-With"]
# Room for multipart boundaries and part headers on top of the file itself.
MULTIPART_OVERHEAD_BYTES = 64 * 1024


@dataclass(slots=True)
class AppContext:
    """Collaborators built once at startup and shared by the request handlers."""

    settings: Settings
    ingestor: AudioIngestor
    recognition: RecognitionService

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        return cls(
            settings=settings,
            ingestor=AudioIngestor(limits=IngestLimits(max_bytes=settings.server.max_upload_bytes)),
            recognition=RecognitionService.from_settings(settings.recognition),
        )


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def _error_response(status_code: int, error: str, **extra: Any) -> JSONResponse:
    content: Dict[str, Any] = {"success": False, "error": error}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


def outcome_to_response(outcome: RecognitionOutcome) -> JSONResponse:
    """Translate a recognition outcome into the response envelope."""

    if isinstance(outcome, Matched):
        return JSONResponse({"success": True, "track": outcome.track.to_dict()})
    if isinstance(outcome, NoMatch):
        return JSONResponse({"success": False, "message": outcome.reason})
    if isinstance(outcome, UpstreamError):
        return JSONResponse(
            {
                "success": False,
                "message": f"{outcome.provider} error: {outcome.status_code}",
                "debug": outcome.detail,
            }
        )
    raise TypeError(f"unknown recognition outcome: {outcome!r}")


router = APIRouter()


@router.get("/")
async def health(context: Annotated[AppContext, Depends(get_context)]) -> Dict[str, Any]:
    return {
        "status": "Setlist relay is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "cors": "enabled",
        "provider": context.recognition.provider.name,
    }


@router.post("/recognize")
async def recognize(
    context: Annotated[AppContext, Depends(get_context)],
    audio: Annotated[Optional[UploadFile], File(description="Audio clip to identify")] = None,
) -> JSONResponse:
    logger.info("recognize.request")
    if audio is None:
        return _error_response(400, NO_AUDIO_MESSAGE)

    try:
        payload = await context.ingestor.from_upload(
            file_reader=audio.read,
            content_type=audio.content_type,
            filename=audio.filename,
            size_hint=audio.size,
        )
    except EmptyAudioError:
        return _error_response(400, NO_AUDIO_MESSAGE)
    except AudioTooLargeError as exc:
        logger.warning("recognize.too_large", extra={"size_bytes": exc.size, "max_bytes": exc.max_bytes})
        return _error_response(413, str(exc))
    finally:
        await audio.close()

    logger.info(
        "recognize.audio",
        extra={
            "size_bytes": payload.size_bytes,
            "content_type": payload.content_type,
            "upload_name": payload.filename,
        },
    )

    try:
        outcome = await context.recognition.recognize(payload)
    except Exception as exc:
        logger.exception("recognize.failed")
        return _error_response(500, str(exc), message=RECOGNITION_FAILED_MESSAGE)

    if isinstance(outcome, Matched):
        logger.info("recognize.matched", extra={"title": outcome.track.title, "artist": outcome.track.artist})
    elif isinstance(outcome, UpstreamError):
        logger.warning("recognize.upstream_error", extra={"status": outcome.status_code})
    else:
        logger.info("recognize.no_match")
    return outcome_to_response(outcome)


def create_app(settings: Optional[Settings] = None, *, context: Optional[AppContext] = None) -> FastAPI:
    """Build the FastAPI application around a single AppContext."""

    if context is None:
        context = AppContext.from_settings(settings or load_settings())
    max_upload_bytes = context.settings.server.max_upload_bytes

    app = FastAPI(
        title="Setlist Relay",
        description="Relays audio clips to a fingerprinting provider and reports the identified track.",
        version=__version__,
    )
    app.state.context = context

    @app.middleware("http")
    async def catch_unhandled_errors(request: Request, call_next):
        # Inside CORSMiddleware, so the 500 envelope still carries CORS headers.
        try:
            return await call_next(request)
        except Exception:
            logger.exception("server.error")
            return _error_response(500, "Internal server error")

    @app.middleware("http")
    async def enforce_upload_limit(request: Request, call_next):
        content_length = request.headers.get("content-length")
        if request.method == "POST" and content_length and content_length.isdigit():
            if int(content_length) > max_upload_bytes + MULTIPART_OVERHEAD_BYTES:
                logger.warning(
                    "recognize.rejected_oversize",
                    extra={"content_length": int(content_length), "max_bytes": max_upload_bytes},
                )
                return _error_response(413, str(AudioTooLargeError(int(content_length), max_upload_bytes)))
        return await call_next(request)

    # Added last so it wraps both middlewares above and preflight never reaches the routes.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(context.settings.server.cors_origins),
        allow_credentials=False,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    @app.exception_handler(RequestValidationError)
    async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        if any(tuple(error.get("loc", ()))[-1:] == ("audio",) for error in errors):
            return _error_response(400, NO_AUDIO_MESSAGE)
        return _error_response(400, "Invalid request", detail=jsonable_encoder(errors))

    app.include_router(router)
    return app


def main() -> None:
    settings = load_settings()
    logging.basicConfig(level=settings.server.log_level, format=LOG_FORMAT)
    app = create_app(settings)
    logger.info(
        "server.start",
        extra={"port": settings.server.port, "provider": app.state.context.recognition.provider.name},
    )
    uvicorn.run(app, host=settings.server.host, port=settings.server.port, log_level=settings.server.log_level.lower())


if __name__ == "__main__":
    main()
