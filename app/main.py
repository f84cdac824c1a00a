# /app/main.py

# --- Core FastAPI Imports ---
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status

# --- Application-specific Router Imports ---
from .routers import (
    author_router,
    book_instance_router,
    book_router,
    dashboard_router,
    genre_router,
)
from .routers.rendering import respond, templates

# --- Core Setup Imports ---
from .core.config import CATALOG_PREFIX, CREATE_TABLES_ON_STARTUP
from .core.logging_config import configure_logging
from .db.database import create_tables
from .services.catalog_helpers.errors import EntityNotFoundError
from .services import dashboard_service
from .services.database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # This code runs ONCE when the application starts up.
    configure_logging()
    if CREATE_TABLES_ON_STARTUP:
        create_tables()
    logger.info("Catalog service started, routes under %s", CATALOG_PREFIX or "/")
    yield
    # This code runs ONCE when the application shuts down.


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="Local Library Catalog",
    description="Server-rendered catalog of books, authors, genres and book copies.",
    version="1.0.0",
    lifespan=lifespan
)


# --- Error Pages ---
@app.exception_handler(EntityNotFoundError)
async def entity_not_found_handler(request: Request, exc: EntityNotFoundError):
    """Renders the generic error page for a record that does not exist."""
    return templates.TemplateResponse(
        request,
        "error.html",
        {"title": "Not Found", "message": str(exc), "status_code": status.HTTP_404_NOT_FOUND},
        status_code=status.HTTP_404_NOT_FOUND,
    )


# --- Router Inclusion ---
# Every catalog page lives under the configurable catalog prefix.
app.include_router(dashboard_router.router, prefix=CATALOG_PREFIX, tags=["Home"])
app.include_router(book_router.router, prefix=CATALOG_PREFIX, tags=["Books"])
app.include_router(author_router.router, prefix=CATALOG_PREFIX, tags=["Authors"])
app.include_router(genre_router.router, prefix=CATALOG_PREFIX, tags=["Genres"])
app.include_router(book_instance_router.router, prefix=CATALOG_PREFIX, tags=["Book Instances"])


# --- Root / Health Check Endpoints ---
@app.get("/", include_in_schema=False)
async def read_root(request: Request, db: DatabaseService = Depends(get_db_service)):
    """The site root shows the same home page as the catalog index."""
    return respond(request, await dashboard_service.index(db=db))


@app.get("/health", tags=["Health Check"])
async def health():
    """A simple health check endpoint to confirm the service is online."""
    return {"status": "Catalog service is running!", "version": app.version}
