# File: connext/main.py
import os
import time
import logging
from typing import Callable
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from connext.api.v1.api import api_router
from connext.core.config import settings
from connext.db.database import engine
from connext.services.invitation_links import InvitationLinkError
from connext.services.pipeline import AssignmentConflict

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
)

allowed_origins = settings.allowed_origins

# CORS middleware goes first so error responses carry the headers too
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials="*" not in allowed_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH", "HEAD"],
    allow_headers=["*", "Authorization", "Content-Type"],
    expose_headers=["X-Process-Time", "Content-Disposition"],
    max_age=3600,
)


# Request logging middleware (AFTER CORS)
@app.middleware("http")
async def log_requests(request: Request, call_next: Callable) -> Response:
    """Log every request with its timing; unhandled errors become a JSON 500"""
    start_time = time.time()
    logger.info(f"{request.method} {request.url.path}")
    if request.query_params:
        logger.debug(f"   Query: {dict(request.query_params)}")

    try:
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )
        response.headers["X-Process-Time"] = str(process_time)
        return response

    except Exception as e:
        process_time = time.time() - start_time
        logger.error(
            f"{request.method} {request.url.path} - "
            f"Error: {str(e)} - "
            f"Time: {process_time:.4f}s"
        )
        logger.exception("Full error traceback:")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": str(e),
                "path": request.url.path,
                "method": request.method
            }
        )


# Domain errors
@app.exception_handler(InvitationLinkError)
async def invitation_link_error_handler(request: Request, exc: InvitationLinkError):
    logger.warning(f"Invitation link rejected on {request.url.path}: {exc.reason}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "reason": exc.reason},
    )


@app.exception_handler(AssignmentConflict)
async def assignment_conflict_handler(request: Request, exc: AssignmentConflict):
    return JSONResponse(
        status_code=409,
        content={
            "detail": str(exc),
            "currentStatus": exc.current,
            "requestedStatus": exc.target,
        },
    )


def _ping_database() -> None:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


@app.on_event("startup")
async def startup_event():
    logger.info(
        f"Starting {settings.PROJECT_NAME} ({settings.ENVIRONMENT}) "
        f"on {settings.API_PREFIX}, CORS origins {allowed_origins}"
    )
    try:
        _ping_database()
        logger.info("Database connected")
    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {e}")
        # Production still boots; /health reports the outage
        if not settings.is_production:
            raise


app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
def read_root():
    return {
        "service": settings.PROJECT_NAME,
        "environment": settings.ENVIRONMENT,
        "api": settings.API_PREFIX,
        "docs": app.docs_url,
    }


@app.get("/health")
def health_check():
    try:
        _ping_database()
        database = "connected"
    except SQLAlchemyError as e:
        logger.error(f"Health check database error: {e}")
        database = f"error: {e}"

    return {
        "status": "healthy" if database == "connected" else "unhealthy",
        "database": database,
        "checkedAt": time.time(),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "connext.main:app",
        host="0.0.0.0" if settings.is_production else "127.0.0.1",
        port=int(os.getenv("PORT", 8000)),
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.is_development,
    )
