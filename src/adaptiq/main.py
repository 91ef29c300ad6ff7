"""Main FastAPI application."""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.accessibility import router as accessibility_router
from .api.adaptation import router as adaptation_router
from .api.health import router as health_router
from .api.profiles import router as profiles_router
from .config import get_settings
from .database import close_db, init_db
from .logging_config import (
    clear_request_context, configure_logging, get_logger, log_request_middleware, log_response_middleware
)
from .utils.error_handler import (
    adaptiq_exception_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from .utils.exceptions import AdaptiqException

# Configure logging first
configure_logging()
logger = get_logger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting Adaptiq", version=settings.app_version)

    try:
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Shutting down Adaptiq")
    await close_db()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Adapts lesson content to learners' support needs and accessibility settings",
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

app.add_exception_handler(AdaptiqException, adaptiq_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def logging_middleware(request: Request, call_next) -> Response:
    """Log HTTP requests and responses."""
    start_time = time.time()
    clear_request_context()

    log_request_middleware({
        "method": request.method,
        "path": str(request.url.path),
        "query_params": dict(request.query_params),
    })

    response = await call_next(request)

    processing_time = time.time() - start_time
    log_response_middleware({
        "status_code": response.status_code,
        "processing_time": f"{processing_time:.4f}s",
    })

    response.headers["X-Process-Time"] = str(processing_time)
    return response


app.include_router(health_router, prefix=settings.api_prefix)
app.include_router(profiles_router, prefix=settings.api_prefix)
app.include_router(accessibility_router, prefix=settings.api_prefix)
app.include_router(adaptation_router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Welcome to Adaptiq",
        "version": settings.app_version,
        "docs": "/docs" if settings.debug else "Documentation not available in production",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "adaptiq.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_config=None,
    )
