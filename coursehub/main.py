"""Main FastAPI application entry point.

Wires CORS, the error envelope, and the catalog, orders, admin and health
routers under ``/api``.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import os
from datetime import datetime

from coursehub.db.config import close_db, init_db
from coursehub.errors import CourseHubError, InternalError
from coursehub.models.schemas import ErrorResponse
from coursehub.routers import admin, courses, health, orders

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Application metadata
APP_NAME = "CourseHub API"
VERSION = "1.0.0"
DESCRIPTION = """
CourseHub Backend API

## Features

* **Catalog**: courses with draft/published state and ordered lessons
* **Orders**: purchases of published courses with a price snapshot
* **Admin summary**: course, lesson, sales and revenue totals
* **Health Check**: liveness and readiness probes
"""

# Status code -> error kind for errors raised outside the domain layer
HTTP_ERROR_KINDS = {
    400: "ValidationError",
    404: "NotFoundError",
    405: "MethodNotAllowed",
    409: "StorageConflictError",
    422: "ValidationError",
    503: "StorageTimeoutError",
}

# Initialize FastAPI app
app = FastAPI(
    title=APP_NAME,
    description=DESCRIPTION,
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# CORS middleware configuration
cors_origins = os.getenv(
    "CORS_ORIGINS",
    "http://localhost:3000,http://localhost:5173"
).split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


def _error_body(request: Request, kind: str, message: str, fields=None) -> dict:
    return ErrorResponse(
        kind=kind,
        message=message,
        fields=fields or [],
        timestamp=datetime.utcnow().isoformat(),
        path=str(request.url),
    ).model_dump()

# Exception handlers


@app.exception_handler(CourseHubError)
async def domain_exception_handler(request: Request, exc: CourseHubError):
    """Render domain errors using their kind and status code"""
    body = _error_body(
        request, exc.kind, exc.message, getattr(exc, "fields", None)
    )
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
):
    """Report malformed request bodies and parameters as ValidationError"""
    fields = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        fields.append({
            "field": ".".join(loc) or "body",
            "message": error.get("msg", "Invalid value"),
        })
    body = _error_body(request, "ValidationError", "Invalid input", fields)
    return JSONResponse(status_code=422, content=body)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions with consistent error format"""
    kind = HTTP_ERROR_KINDS.get(exc.status_code, "HTTPError")
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, kind, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    error = InternalError()
    return JSONResponse(
        status_code=error.status_code,
        content=_error_body(request, error.kind, error.message),
    )

# Include routers
app.include_router(health.router, prefix="/api", tags=["Health"])
app.include_router(courses.router, prefix="/api")
app.include_router(orders.router, prefix="/api")
app.include_router(admin.router, prefix="/api")

# Root endpoint


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information"""
    return {
        "name": APP_NAME,
        "version": VERSION,
        "status": "running",
        "environment": os.getenv("ENVIRONMENT", "development"),
        "timestamp": datetime.utcnow().isoformat(),
        "docs": "/docs",
        "health": "/api/health"
    }


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").lower() in {"1", "true", "yes"}

# Application startup event


@app.on_event("startup")
async def startup_event():
    """Application startup tasks"""
    logger.info(f"Starting {APP_NAME} v{VERSION}")
    logger.info(f"Environment: {os.getenv('ENVIRONMENT', 'development')}")
    logger.info(f"CORS Origins: {cors_origins}")
    if _env_flag("AUTO_MIGRATE"):
        import subprocess
        logger.info("AUTO_MIGRATE enabled: running 'alembic upgrade head'")
        try:
            result = subprocess.run(
                ["alembic", "upgrade", "head"],
                cwd=os.path.join(os.path.dirname(__file__), ".."),
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            logger.error(
                "Alembic not found - ensure it's installed in the environment"
            )
        else:
            if result.returncode != 0:
                logger.error(
                    "Alembic upgrade failed (code %s): %s\n%s",
                    result.returncode,
                    result.stdout,
                    result.stderr,
                )
            else:
                logger.info("Alembic migration applied successfully")
    elif _env_flag("DB_CREATE_ALL"):
        logger.info("DB_CREATE_ALL enabled: creating tables")
        await init_db()

# Application shutdown event


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown tasks"""
    logger.info(f"Shutting down {APP_NAME}")
    await close_db()

if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8000))
    host = os.getenv("HOST", "0.0.0.0")

    uvicorn.run(
        "coursehub.main:app",
        host=host,
        port=port,
        reload=True,
        log_level="info"
    )
