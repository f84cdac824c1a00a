# /app/models/book_model.py

# --- Core Imports ---
from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field

from .form_fields import escaped_text, required_text

# --- Model Definitions ---

class BookForm(BaseModel):
    """
    The contract for the create/update book form.

    `author` and every entry in `genre` are ids of existing records, exactly as
    the form's select box and checkboxes submit them.
    """
    model_config = ConfigDict(validate_default=True)

    title: Annotated[str, required_text("Title must not be empty.")] = ""
    author: Annotated[str, required_text("Author must not be empty.")] = ""
    summary: Annotated[str, required_text("Summary must not be empty.")] = ""
    isbn: Annotated[str, required_text("ISBN must not be empty.")] = ""
    genre: List[Annotated[str, escaped_text()]] = Field(default_factory=list)

    def to_record(self) -> dict:
        """Maps form field names onto the storage column names."""
        return {
            "title": self.title,
            "author_id": self.author,
            "summary": self.summary,
            "isbn": self.isbn,
            "genre_ids": list(self.genre),
        }
