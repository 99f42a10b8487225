"""
app/main.py

Purpose: Application entry point

- Initializes FastAPI app
- Loads configuration and logging
- Registers API routes (sync, status) and the front-end build
- No business logic should be written here
- Manages application lifecycle (startup/shutdown)
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from contextlib import asynccontextmanager
import time

from app.core.config import settings, validate_settings
from app.core.errors import add_exception_handlers, error_response
from app.core.logging import setup_logging, get_logger
from app.db.supabase import get_store, close_store
from app.api import status, sync
from app.api.frontend import register_frontend

# Initialize logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info("🚀 Starting sync gateway...")

    try:
        logger.info("Validating configuration...")
        for warning in validate_settings():
            logger.warning(f"⚠️ {warning}; data endpoints will report 'not configured'")

        # First attempt only; handlers retry while the handle is absent
        store = await get_store()
        if store is None:
            logger.warning("⚠️ Supabase client not available at startup")
        else:
            logger.info("✅ Supabase client ready")

        logger.info(f"Environment: {settings.ENVIRONMENT}")
        logger.info(f"Debug Mode: {settings.DEBUG}")

    except Exception as e:
        logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
        raise

    yield  # Application runs here

    # Shutdown
    logger.info("🛑 Shutting down sync gateway...")
    await close_store()
    logger.info("👋 Sync gateway shut down")


app = FastAPI(
    title="Loan Sync Gateway",
    description="Snapshot and batch sync between the web client and Supabase",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.DEBUG,
    docs_url="/docs" if settings.is_development else None,  # Disable docs in production
    redoc_url="/redoc" if settings.is_development else None,
)

add_exception_handlers(app)

# Request body size limit
def _payload_too_large(request: Request, size: str) -> JSONResponse:
    logger.warning(
        f"Rejected {request.method} {request.url.path}: body of {size} bytes",
        extra={"path": request.url.path}
    )
    return error_response(
        413,
        "Request body too large",
        "PAYLOAD_TOO_LARGE",
        {"limit": settings.MAX_BODY_BYTES}
    )


@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    """
    Reject bodies larger than MAX_BODY_BYTES.

    Declared lengths are checked from the header. Chunked bodies carry
    no length, so they are read (and cached for the handler) and
    measured before the route runs.
    """
    content_length = request.headers.get("content-length")
    if content_length is not None:
        if content_length.isdigit() and int(content_length) > settings.MAX_BODY_BYTES:
            return _payload_too_large(request, content_length)
    elif "chunked" in request.headers.get("transfer-encoding", "").lower():
        body = await request.body()
        if len(body) > settings.MAX_BODY_BYTES:
            return _payload_too_large(request, str(len(body)))
    return await call_next(request)


# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time header to all responses."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    if process_time > settings.SLOW_REQUEST_SECONDS:
        logger.warning(
            f"Slow request detected: {request.method} {request.url.path}",
            extra={"process_time": process_time}
        )

    return response


# CORS Middleware (outermost, so early 413 responses carry CORS headers)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check endpoint
@app.get("/health", tags=["Health"], response_class=PlainTextResponse)
async def health_check():
    """
    Liveness probe. Does not touch the store.
    """
    return "OK"


# Register API routes
app.include_router(status.router, prefix="/api", tags=["Status"])
app.include_router(sync.router, prefix="/api", tags=["Sync"])

# Front-end catch-all goes last
register_frontend(app, settings.STATIC_DIR)


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Server running on http://localhost:{settings.PORT}")
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )
