import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from storagebox.core.config import Settings, get_settings
from storagebox.core.exceptions import InternalError, StorageBoxError
from storagebox.core.ratelimit import build_limiter, handle_rate_limit_exceeded
from storagebox.core.security import TokenService
from storagebox.models.database import build_engine, build_session_factory, init_db
from storagebox.routers import auth, dashboard, files
from storagebox.services.blob_store import S3BlobStore

logger = logging.getLogger(__name__)


async def handle_storagebox_error(request: Request, exc: StorageBoxError):
    if exc.status_code >= 500:
        logger.error("%s on %s %s", type(exc).__name__, request.method, request.url.path, exc_info=exc)
        # dependency detail stays in the log
        message = exc.default_message
    else:
        logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
        message = exc.message
    return JSONResponse(status_code=exc.status_code, content={"message": message})


async def handle_validation_error(request: Request, exc: RequestValidationError):
    logger.warning("Invalid request on %s %s", request.method, request.url.path)
    details = [{"loc": list(err.get("loc", ())), "msg": err.get("msg")} for err in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "invalid request", "details": details},
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": InternalError.default_message},
    )


def create_app(settings: Optional[Settings] = None, s3_client=None) -> FastAPI:
    """Build the app. Fails fast when required settings are missing."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    engine = build_engine(settings.database_url)
    init_db(engine)

    app = FastAPI(title="storagebox", description="Personal cloud storage API", version="1.0.0")
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_service = TokenService(settings)
    app.state.blob_store = S3BlobStore.from_settings(settings, client=s3_client)

    app.state.limiter = build_limiter(settings)

    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RateLimitExceeded, handle_rate_limit_exceeded)
    app.add_exception_handler(StorageBoxError, handle_storagebox_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    @app.get("/health")
    @app.state.limiter.exempt
    def health():
        return {"ok": True}

    # include our routers
    app.include_router(auth.router)
    app.include_router(files.router)
    app.include_router(dashboard.router)

    logger.info("storagebox ready (bucket=%s)", settings.aws_s3_bucket_name)
    return app
