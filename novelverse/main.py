import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from novelverse.api.deps import get_memory_storage
from novelverse.api.router import api_router
from novelverse.core.database import SessionLocal, create_tables
from novelverse.core.settings import settings
from novelverse.schemas.response import ErrorResponse, Messages
from novelverse.schemas.user import UserCreate
from novelverse.storage import DatabaseStorage, NovelStorage

logger = logging.getLogger(__name__)


# Configure logging
def setup_logging():
    """Configure logging for the application"""
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handlers = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_FILE:
        log_path = Path(settings.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )

    # Set specific loggers to appropriate levels
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("fastapi").setLevel(logging.WARNING)

    logger.info(f"Logging configured with level: {settings.LOG_LEVEL}")


# Setup logging before creating the app
setup_logging()


def bootstrap_admin(storage: NovelStorage) -> None:
    """Create the FIRST_ADMIN_* account unless it already exists."""
    if not settings.FIRST_ADMIN_USERNAME or not settings.FIRST_ADMIN_PASSWORD:
        return
    if storage.get_user_by_username(settings.FIRST_ADMIN_USERNAME):
        return

    storage.create_user(
        UserCreate(
            username=settings.FIRST_ADMIN_USERNAME,
            email=settings.FIRST_ADMIN_EMAIL,
            password=settings.FIRST_ADMIN_PASSWORD,
            is_admin=True,
        )
    )
    logger.info(f"Bootstrap admin account created: {settings.FIRST_ADMIN_USERNAME}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    logger.info(f"{settings.PROJECT_NAME} starting up...")

    if settings.uses_memory_storage:
        logger.info("Using in-memory storage")
        bootstrap_admin(get_memory_storage())
    elif settings.CREATE_TABLES_ON_STARTUP:
        create_tables()
        db = SessionLocal()
        try:
            bootstrap_admin(DatabaseStorage(db))
        finally:
            db.close()

    yield

    # Shutdown
    logger.info(f"{settings.PROJECT_NAME} shutting down...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description=settings.DESCRIPTION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan,
)

# Set up CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _validation_response(request: Request, errors: list) -> JSONResponse:
    logger.warning(f"Validation error on {request.method} {request.url.path}: {errors}")
    message = Messages.INVALID_REQUEST
    if errors:
        message = errors[0].get("msg", message)
    body = ErrorResponse(message=message, errors=jsonable_encoder(errors))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(exclude_none=True),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return _validation_response(request, exc.errors())


@app.exception_handler(ValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: ValidationError):
    return _validation_response(request, exc.errors())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    body = ErrorResponse(message=str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    body = ErrorResponse(message=Messages.INTERNAL_ERROR)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(exclude_none=True),
    )


# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)


# Health check endpoint
@app.get("/health")
def health_check():
    """Health check endpoint for monitoring and load balancers"""
    info = {
        "timestamp": datetime.utcnow().isoformat(),
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "storage": settings.STORAGE_BACKEND,
    }
    if settings.uses_memory_storage:
        return {"status": "healthy", **info}

    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "database": "disconnected", **info},
        )
    finally:
        db.close()

    return {"status": "healthy", "database": "connected", **info}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("novelverse.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
