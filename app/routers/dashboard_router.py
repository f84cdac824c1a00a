# /app/routers/dashboard_router.py

# --- Core FastAPI Imports ---
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

# --- Service and Model Imports ---
# Import the business logic service that this router will use.
from ..services import dashboard_service
# Import the database service dependency provider.
from ..services.database_service import DatabaseService, get_db_service
# Import the Pydantic model to define the response shape of the JSON summary.
from ..models.dashboard_model import CatalogSummary
from .rendering import respond

# --- APIRouter Instance ---
router = APIRouter()

# --- Endpoint Definitions ---
@router.get("/", response_class=HTMLResponse, name="index", summary="Catalog Home Page")
async def index(request: Request, db: DatabaseService = Depends(get_db_service)):
    """
    Renders the home page with the number of books, copies (all and
    available), authors and genres.
    """
    return respond(request, await dashboard_service.index(db=db))


@router.get(
    "/summary",
    response_model=CatalogSummary,
    summary="Get Catalog Summary",
    description="The same counts as the home page, as JSON.",
)
async def get_catalog_summary(db: DatabaseService = Depends(get_db_service)):
    return await dashboard_service.get_summary_data(db=db)
