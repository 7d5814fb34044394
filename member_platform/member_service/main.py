"""
Member Service - registration, login and loyalty profile API
"""
from contextlib import asynccontextmanager
import logging
import time

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .auth import Identity, build_token_guard
from .config import settings
from .db import init_db
from .dependencies import get_current_identity
from .errors import ServiceError
from .routes import auth, health, profile
from .utils.event_logger import setup_logging

setup_logging(settings.LOG_LEVEL, settings.LOG_DIR)
logger = logging.getLogger(__name__)


def warn_if_default_secret(app_settings) -> bool:
    """Log a warning when tokens would be signed with the built-in secret."""
    if app_settings.uses_default_secret:
        logger.warning(
            "SECRET_KEY is not set; tokens are signed with the built-in development secret"
        )
        return True
    return False


warn_if_default_secret(settings)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Initialize database on startup"""
    init_db()
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Authentication and loyalty membership profile API",
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# Signing configuration is loaded once and shared by every request
app.state.token_guard = build_token_guard(settings)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "HEAD", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["Origin", "Content-Type", "Accept", "Authorization"],
)


@app.middleware("http")
async def request_timer(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - start
    response.headers["X-Process-Time"] = f"{elapsed:.4f}"
    logger.info(
        "%s %s %s %.3fs", request.method, request.url.path, response.status_code, elapsed
    )
    return response


@app.exception_handler(ServiceError)
async def service_error_handler(_request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_request: Request, exc: RequestValidationError):
    logger.debug("Rejected request body: %s", exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body"},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(_request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


# Include routers
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(health.router)


@app.get("/", tags=["General"])
def hello_world():
    """Get a simple hello world message"""
    return {"message": "hello world"}


@app.get("/protected", tags=["General"])
def protected_route(identity: Identity = Depends(get_current_identity)):
    """Example of a route that requires a bearer token"""
    return {
        "message": "This is a protected route",
        "user_id": identity.user_id,
        "email": identity.email,
    }


def run():
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run("member_platform.member_service.main:app", host="0.0.0.0", port=3000)
