import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .intake import IntakeError, IntakeLimits, UploadIntake
from .recognition import RecognitionGateway
from .responses import error_body, map_intake_error, map_outcome
from .settings import Settings, load_settings

logger = logging.getLogger(__name__)

NOT_INITIALIZED_MESSAGE = "ACRCloud client not initialized. Please check your credentials."
UPLOAD_FIELD = "audio"


def get_gateway(request: Request) -> RecognitionGateway:
    return request.app.state.gateway


def get_intake(request: Request) -> UploadIntake:
    return request.app.state.intake


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def create_app(
    settings: Optional[Settings] = None,
    *,
    gateway: Optional[RecognitionGateway] = None,
    intake: Optional[UploadIntake] = None,
) -> FastAPI:
    cfg = settings or load_settings()

    app = FastAPI(
        title="ClipFinder API",
        description="Identify music from short audio clips via ACRCloud",
        version=__version__,
    )
    app.state.settings = cfg
    app.state.gateway = gateway or RecognitionGateway.from_settings(cfg.acrcloud)
    app.state.intake = intake or UploadIntake(limits=IntakeLimits(max_bytes=cfg.upload.max_bytes))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cfg.server.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content=error_body("Invalid request"))

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=error_body(str(exc.detail)))

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("http.unhandled_error", extra={"path": request.url.path})
        return JSONResponse(status_code=500, content=error_body(str(exc) or "Internal server error"))

    @app.get("/")
    async def index() -> Dict[str, Any]:
        return {
            "message": "ClipFinder API is running!",
            "version": __version__,
            "endpoints": {
                "/api/health": "Health check",
                "/api/identify": "POST - Identify music from audio file",
                "/api/test-acr": "GET - Test ACRCloud connection",
            },
        }

    @app.get("/api/health")
    async def health(gateway: RecognitionGateway = Depends(get_gateway)) -> Dict[str, Any]:
        return {
            "status": "healthy",
            "timestamp": _utc_timestamp(),
            "acrcloud": {
                "configured": gateway.configured,
                "client_ready": gateway.is_ready,
            },
        }

    @app.get("/api/test-acr")
    async def test_acr(gateway: RecognitionGateway = Depends(get_gateway)) -> JSONResponse:
        if not gateway.is_ready:
            return JSONResponse(status_code=500, content=error_body(NOT_INITIALIZED_MESSAGE))

        report = await gateway.test_provider()
        if report.raw_response is None:
            body = error_body(getattr(report.outcome, "message", "Internal server error"))
            body["message"] = "ACRCloud API test failed"
            return JSONResponse(status_code=500, content=body)

        return JSONResponse(
            {
                "success": True,
                "message": "ACRCloud API is working!",
                "test_result": report.raw_response,
                "outcome": report.outcome.variant,
                "config": {
                    "host": report.host,
                    "configured": report.configured,
                    "has_credentials": report.has_credentials,
                },
            }
        )

    @app.post("/api/identify")
    async def identify(
        request: Request,
        gateway: RecognitionGateway = Depends(get_gateway),
        intake: UploadIntake = Depends(get_intake),
    ) -> JSONResponse:
        async with request.form(max_files=1) as form:
            upload = form.get(UPLOAD_FIELD)
            try:
                clip = await intake.from_upload(upload if isinstance(upload, UploadFile) else None)
            except IntakeError as exc:
                logger.info("identify.rejected", extra={"reason": type(exc).__name__})
                status, body = map_intake_error(exc)
                return JSONResponse(status_code=status, content=body)

        logger.info(
            "identify.request",
            extra={"upload_name": clip.filename, "size_bytes": clip.size_bytes},
        )
        outcome = await gateway.identify(clip.data)
        status, body = map_outcome(outcome)
        return JSONResponse(status_code=status, content=body)

    static_dir = cfg.server.static_dir
    if static_dir and os.path.isdir(static_dir):
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app


app = create_app()
