"""
Case Pack Uploader API

FastAPI entry point. Run with: uvicorn main:app --reload
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from config import settings, configure_logging
from exceptions import AppError

configure_logging()

logger = structlog.get_logger(__name__)

API_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """No connections to open; startup only logs the upload configuration."""
    logger.info(
        "application_starting",
        environment=settings.environment,
        debug=settings.debug,
        shiphero_api=settings.shiphero_api_url,
        batch_size=settings.upload_batch_size,
        row_delay_ms=settings.upload_row_delay_ms
    )

    yield

    logger.info("application_shutting_down")


app = FastAPI(
    title="Case Pack Uploader",
    description="Upload case barcode and case quantity data to ShipHero from CSV",
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# The browser frontend sends the ShipHero token in the Authorization header
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)


# ===================
# ROUTES
# ===================

@app.get("/health")
async def health_check():
    """
    Health check endpoint.

    ShipHero is not called; the upload settings are echoed so a
    misconfigured deployment is visible.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
        "upload": {
            "shiphero_api": settings.shiphero_api_url,
            "batch_size": settings.upload_batch_size,
            "row_delay_ms": settings.upload_row_delay_ms,
        },
    }


@app.get("/")
async def root():
    """API name and endpoint index."""
    return {
        "name": "Case Pack Uploader API",
        "version": API_VERSION,
        "docs": "/docs" if settings.debug else "Disabled in production",
        "health": "/health",
        "endpoints": {
            "parse_csv": "/api/parse-csv",
            "process_csv": "/api/process-csv",
            "auth_refresh": "/api/shiphero/auth/refresh",
        }
    }


# ===================
# ERROR HANDLERS
# ===================

def _error_body(code: str, message: str, details=None) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
    }


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """AppError raised outside a route's own handling."""
    logger.warning(
        "app_error",
        path=request.url.path,
        code=exc.code,
        error=exc.message
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Body or form fields of the wrong shape, e.g. data that is not a list."""
    logger.warning(
        "request_validation_failed",
        path=request.url.path,
        errors=exc.errors()
    )
    return JSONResponse(
        status_code=422,
        content=_error_body(
            "VALIDATION_ERROR",
            "Request validation failed",
            details=jsonable_errors(exc),
        )
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Unhandled exceptions get the standard error body with a 500."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__
    )

    return JSONResponse(
        status_code=500,
        content=_error_body(
            "INTERNAL_ERROR",
            "An unexpected error occurred",
            details=str(exc) if settings.debug else None,
        )
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Location and message of each validation error."""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg")}
        for error in exc.errors()
    ]


# ===================
# INCLUDE ROUTERS
# ===================
from routes.case_packs import router as case_packs_router
from routes.auth import router as auth_router

app.include_router(case_packs_router, prefix="/api", tags=["Case Packs"])
app.include_router(auth_router, prefix="/api/shiphero/auth", tags=["Auth"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
