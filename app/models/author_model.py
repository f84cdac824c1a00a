# /app/models/author_model.py

# --- Core Imports ---
from datetime import date
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict

from .form_fields import alphanumeric_text, optional_iso_date

AUTHOR_NAME_MAX_LENGTH = 100

# --- Model Definitions ---

class AuthorForm(BaseModel):
    """
    The contract for the create/update author form. Both dates are optional,
    but must be real calendar dates when they are given.
    """
    model_config = ConfigDict(validate_default=True)

    first_name: Annotated[
        str,
        alphanumeric_text(
            "First name must be specified.",
            "First name has non-alphanumeric characters.",
            max_length=AUTHOR_NAME_MAX_LENGTH,
            too_long_message="First name must contain at most 100 characters.",
        ),
    ] = ""
    family_name: Annotated[
        str,
        alphanumeric_text(
            "Family name must be specified.",
            "Family name has non-alphanumeric characters.",
            max_length=AUTHOR_NAME_MAX_LENGTH,
            too_long_message="Family name must contain at most 100 characters.",
        ),
    ] = ""
    date_of_birth: Annotated[Optional[date], optional_iso_date("Invalid date of birth")] = None
    date_of_death: Annotated[Optional[date], optional_iso_date("Invalid date of death")] = None

    def to_record(self) -> dict:
        return self.model_dump()
