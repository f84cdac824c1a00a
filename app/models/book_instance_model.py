# /app/models/book_instance_model.py

# --- Core Imports ---
from datetime import date
from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict

from .form_fields import one_of, optional_iso_date, required_text

# --- Enumerations ---

class BookInstanceStatus(str, Enum):
    AVAILABLE = "Available"
    MAINTENANCE = "Maintenance"
    LOANED = "Loaned"
    RESERVED = "Reserved"

STATUS_CHOICES = [status.value for status in BookInstanceStatus]

# --- Model Definitions ---

class BookInstanceForm(BaseModel):
    """
    The contract for the create/update form of a physical copy.

    `status` must be one of the `BookInstanceStatus` values; anything else is a
    validation error rather than free text.
    """
    model_config = ConfigDict(validate_default=True)

    book: Annotated[str, required_text("Book must be specified")] = ""
    imprint: Annotated[str, required_text("Imprint must be specified")] = ""
    status: Annotated[BookInstanceStatus, one_of(STATUS_CHOICES, "Invalid status")] = BookInstanceStatus.MAINTENANCE
    due_back: Annotated[Optional[date], optional_iso_date("Invalid date")] = None

    def to_record(self) -> dict:
        return {
            "book_id": self.book,
            "imprint": self.imprint,
            "status": self.status.value,
            "due_back": self.due_back,
        }
