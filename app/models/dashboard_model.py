# /app/models/dashboard_model.py

# --- Core Imports ---
# Import the necessary components from Pydantic for data modeling.
from pydantic import BaseModel, Field

# --- Model Definition ---

class CatalogSummary(BaseModel):
    """
    Defines the data shown on the catalog home page: how many records of each
    kind the library currently holds.
    """

    book_count: int = Field(..., description="Total number of books (titles).", example=12)
    book_instance_count: int = Field(..., description="Total number of physical copies.", example=30)
    book_instance_available_count: int = Field(
        ...,
        description="Number of copies whose status is 'Available'.",
        example=17
    )
    author_count: int = Field(..., description="Total number of authors.", example=8)
    genre_count: int = Field(..., description="Total number of genres.", example=5)
