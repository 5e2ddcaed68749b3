import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from webcreative.api.v1.endpoints.contacts import router as contacts_router
from webcreative.api.v1.endpoints.submission import router as submission_router
from webcreative.constants.constants import ERR_INVALID_BODY, ERR_METHOD_NOT_ALLOWED
from webcreative.core.config import settings
from webcreative.core.ratelimit import limiter, rate_limit_exceeded_handler
from webcreative.services.ContactStore import build_contact_store

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Async context manager for app lifespan events"""

    try:
        logger.info("🚀 Starting WebCreative contact API...")

        store = build_contact_store(settings)
        logger.info(f"🔌 Initializing {store.backend.value} contact store...")
        await store.init()
        app.state.contact_store = store
        logger.info("✅ Contact store ready")

        if not settings.ADMIN_API_KEY_HASH:
            logger.warning("⚠️ ADMIN_API_KEY_HASH not set, admin routes are open")
        if not settings.MAIL_ENABLED:
            logger.warning("⚠️ Mail relay not configured, notifications are disabled")

    except Exception as e:
        logger.critical(f"🔥 Application startup failed: {str(e)}")
        raise

    try:
        yield
    finally:
        logger.info("🔌 Closing contact store...")
        await app.state.contact_store.close()
        logger.info("👋 Application shutdown complete")


app = FastAPI(
    title="WebCreative Contact API",
    description="Contact form submissions and their admin panel",
    version="1.0.0",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"Request: {request.method} {request.url}")
    response = await call_next(request)
    logger.info(f"Response status: {response.status_code}")
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    if exc.status_code == 405:
        detail = ERR_METHOD_NOT_ALLOWED
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.error(f"Validation Error: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": ERR_INVALID_BODY},
    )


@app.get("/", tags=["Health Check"])
async def health_check(request: Request):
    store = request.app.state.contact_store
    try:
        await store.ping()
        return {
            "status": "healthy",
            "service": "WebCreative Contact API",
            "store": store.backend.value,
            "notifications": settings.MAIL_ENABLED
        }
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        return {
            "status": "unhealthy",
            "service": "WebCreative Contact API",
            "store": store.backend.value,
            "error": "store unreachable"
        }


app.include_router(submission_router)
app.include_router(contacts_router)

logger.info(f"✅ Loaded {len(app.routes)} routes")


def run():
    """Serve the API with uvicorn on HOST:PORT."""
    import uvicorn

    uvicorn.run("webcreative.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
