"""FastAPI application main entry point."""

import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.domain.exceptions import (
    InvalidStatusTransitionError,
    OrderNotFoundError,
    OrderPersistenceError,
    OrderValidationError,
)
from storefront.infrastructure.database import close_database, init_database
from storefront.infrastructure.logging import configure_logging
from storefront.settings import get_app_settings

from apps.api.deps import close_order_rate_limiter
from apps.api.v1.endpoints import admin_orders, orders

settings = get_app_settings()
configure_logging(settings.api.log_level)
logger = logging.getLogger(__name__)


# =============================================================================
# CREATE FASTAPI APP
# =============================================================================

app = FastAPI(
    title=settings.api.title,
    description="Order checkout and order management API",
    version=settings.api.version,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-RateLimit-Remaining", "X-RateLimit-Reset"],
)

# Include routers
app.include_router(orders.router, prefix="/api")
app.include_router(admin_orders.router, prefix="/api")


# =============================================================================
# REQUEST LOGGING MIDDLEWARE
# =============================================================================

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests with timing."""
    start_time = time.time()

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(
        f"{request.method} {request.url.path} "
        f"[{response.status_code}] ({duration:.3f}s)"
    )

    return response


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

def _error(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
        headers=headers,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report the first validation problem as a 400.

    Args:
        request: FastAPI request
        exc: RequestValidationError raised while parsing the request

    Returns:
        JSONResponse with error details
    """
    errors = exc.errors()
    if not errors:
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid request")

    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path", "header")]
    message = first.get("msg", "Invalid request")
    if location:
        message = f"{'.'.join(location)}: {message}"
    return _error(status.HTTP_400_BAD_REQUEST, message)


@app.exception_handler(OrderValidationError)
async def order_validation_error_handler(request: Request, exc: OrderValidationError) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, exc.message)


@app.exception_handler(InvalidStatusTransitionError)
async def invalid_transition_handler(request: Request, exc: InvalidStatusTransitionError) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, exc.message)


@app.exception_handler(OrderNotFoundError)
async def order_not_found_handler(request: Request, exc: OrderNotFoundError) -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, "Order not found")


@app.exception_handler(OrderPersistenceError)
async def order_persistence_error_handler(request: Request, exc: OrderPersistenceError) -> JSONResponse:
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Handle ValueError exceptions.

    Args:
        request: FastAPI request
        exc: ValueError exception

    Returns:
        JSONResponse with error details
    """
    return _error(status.HTTP_400_BAD_REQUEST, str(exc))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


# =============================================================================
# STARTUP/SHUTDOWN EVENTS
# =============================================================================

@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    logger.info(f"🚀 {settings.api.title} starting up...")
    if settings.database.create_tables:
        await init_database()


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    await close_order_rate_limiter()
    await close_database()
    logger.info("👋 Shutdown complete")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        Health status
    """
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
