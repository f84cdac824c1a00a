# /app/services/dashboard_service.py

# --- Core Imports ---
import asyncio

# Import the Pydantic model to ensure our output matches the data contract.
from ..models.dashboard_model import CatalogSummary
from ..models.view_model import RenderView
# Import the DatabaseService to interact with our data layer.
from .database_service import DatabaseService

# --- Core Public Functions ---

async def get_summary_data(db: DatabaseService) -> CatalogSummary:
    """
    Counts the records of every catalog entity. The five counts are
    independent, so they are requested concurrently.

    Args:
        db: An instance of the DatabaseService, provided by dependency injection.

    Returns:
        A CatalogSummary Pydantic object containing the counts.
    """
    books, instances, available, authors, genres = await asyncio.gather(
        db.count_books(),
        db.count_book_instances(),
        db.count_book_instances(status="Available"),
        db.count_authors(),
        db.count_genres(),
    )
    return CatalogSummary(
        book_count=books,
        book_instance_count=instances,
        book_instance_available_count=available,
        author_count=authors,
        genre_count=genres,
    )


async def index(db: DatabaseService) -> RenderView:
    """Builds the catalog home page."""
    summary = await get_summary_data(db)
    return RenderView("index", {"title": "Local Library Home", **summary.model_dump()})
