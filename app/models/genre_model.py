# /app/models/genre_model.py

from typing import Annotated

from pydantic import BaseModel, ConfigDict

from .form_fields import required_text

GENRE_NAME_MIN_LENGTH = 3
GENRE_NAME_MAX_LENGTH = 100

class GenreForm(BaseModel):
    """The contract for the create/update genre form."""
    model_config = ConfigDict(validate_default=True)

    name: Annotated[
        str,
        required_text(
            "Genre name must contain at least 3 characters",
            min_length=GENRE_NAME_MIN_LENGTH,
            max_length=GENRE_NAME_MAX_LENGTH,
            too_long_message="Genre name must contain at most 100 characters",
        ),
    ] = ""

    def to_record(self) -> dict:
        return self.model_dump()
