"""
Event Check-in System - FastAPI Backend
Main application entry point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from app.core.config import settings
from app.core.db import engine, Base, SessionLocal
from app.core.errors import AppError
from app.api import routes_admin, routes_auth, routes_events, routes_guest, routes_public, routes_users
from app.services.account_service import AccountService
from app.utils.responses import app_error_response, error_response

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    # Create database tables
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")

    db = SessionLocal()
    try:
        AccountService.ensure_root(db, settings.ROOT_USERNAME, settings.ROOT_PASSWORD, settings.ROOT_NAME)
    finally:
        db.close()

    yield
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Event Check-in System",
    description="Staff accounts, event guest lists and door check-in",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(AppError)
async def handle_app_error(request: Request, exc: AppError):
    return app_error_response(exc)

@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(
        message="Internal server error",
        error_code="internal_error",
        status_code=500
    )

# Include routers
app.include_router(routes_public.router, tags=["public"])
app.include_router(routes_auth.router, prefix="/auth", tags=["auth"])
app.include_router(routes_users.router, prefix="/users", tags=["users"])
app.include_router(routes_admin.router, tags=["admin"])
app.include_router(routes_events.router, prefix="/events", tags=["events"])
app.include_router(routes_guest.router, tags=["guests"])

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
