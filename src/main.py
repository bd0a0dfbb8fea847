"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from src.api import auth, jobs, pages, slideshow, staff, users, webhooks
from src.api.handler import HandlerContext, HandlerOptions, create_api_handler
from src.api.responses import success
from src.config import get_settings
from src.database import db, execute_query
from src.errors import DatabaseError, register_exception_handlers
from src.logging_config import configure_logging

settings = get_settings()
configure_logging(settings)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info(f"Starting in {settings.environment} ({db.mode} database mode)")
    yield


app = FastAPI(
    title="Restaurant Back Office API",
    description="Accounts, CMS pages, staff, careers and billing for the restaurant platform",
    version="0.1.0",
    lifespan=lifespan,
)

register_exception_handlers(app)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:3001",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(pages.router)
app.include_router(staff.router)
app.include_router(jobs.router)
app.include_router(jobs.admin_router)
app.include_router(slideshow.router)
app.include_router(webhooks.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}


async def db_test(ctx: HandlerContext) -> Response:
    """Round-trip a trivial query through the SQL client."""
    try:
        rows = execute_query("SELECT 1 AS ok")
    except SQLAlchemyError as e:
        raise DatabaseError("Database connection failed") from e
    return success(database="connected", mode=str(db.mode), result=rows)


app.add_api_route("/api/v1/db-test", create_api_handler(HandlerOptions(method="GET"), db_test), methods=["GET"])
