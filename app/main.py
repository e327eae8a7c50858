"""
app/main.py

Purpose: Application entry point

- Initializes FastAPI app
- Loads configuration and logging
- Wires the session store, FinanZas client and dispatcher
- Registers API routes (webhook)
- No business logic should be written here
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import time

from app.core.config import settings, validate_settings
from app.core.errors import add_exception_handlers
from app.core.logging import setup_logging, get_logger
from app.flow.dispatcher import MessageDispatcher
from app.services.finanzas_service import FinanZasService
from app.services.session_service import SessionStore
from app.services.twilio_service import twilio_service
from app.api import webhook

# Initialize logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info("🚀 Starting FinanZas WhatsApp bot...")

    try:
        validate_settings()
        logger.info("✅ Configuration validated")
    except Exception as e:
        logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
        raise

    finanzas = FinanZasService()
    store = SessionStore()

    app.state.store = store
    app.state.twilio = twilio_service
    app.state.dispatcher = MessageDispatcher(store=store, submitter=finanzas)

    logger.info(f"Connected to FinanZas API at: {finanzas.base_url}")
    if not twilio_service.is_configured():
        logger.warning("⚠️ Twilio is not configured; only JSON webhook replies will be delivered")

    logger.info(f"Environment: {settings.ENVIRONMENT}")

    yield  # Application runs here

    logger.info("🛑 Shutting down FinanZas WhatsApp bot...")
    await finanzas.aclose()
    logger.info("👋 Shut down successfully")


app = FastAPI(
    title="FinanZas WhatsApp Bot",
    description="WhatsApp front-end that registers income and expenses in FinanZas",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.DEBUG,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time header to all responses."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    if process_time > 5.0:
        logger.warning(
            f"Slow request detected: {request.method} {request.url.path}",
            extra={"process_time": process_time}
        )

    return response


add_exception_handlers(app)

app.include_router(webhook.router, prefix=settings.API_PREFIX, tags=["Webhook"])


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - basic info."""
    return {
        "name": "FinanZas WhatsApp Bot",
        "version": "1.0.0",
        "status": "running",
        "environment": settings.ENVIRONMENT
    }


@app.get("/health", tags=["Health"])
async def health_check(request: Request):
    """
    Health check endpoint. Sessions are in-memory, so the count resets on restart.
    """
    store = getattr(request.app.state, "store", None)
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "environment": settings.ENVIRONMENT,
        "version": "1.0.0",
        "checks": {
            "finanzas_api": settings.FINANZAS_API_BASE_URL,
            "twilio": "configured" if twilio_service.is_configured() else "not_configured",
            "active_sessions": len(store) if store is not None else 0,
        }
    }


@app.get("/live", tags=["Health"])
async def liveness_check():
    """
    Liveness probe - indicates if app is alive.
    """
    return {"status": "alive"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )
