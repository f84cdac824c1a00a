# /app/models/form_fields.py

"""
Reusable field rules for the HTML form models.

Each builder returns a pydantic validator that can be attached to a field with
`Annotated[...]`. Text rules run on the already-trimmed value and HTML-escape
it once it has passed, so what ends up in the model is safe to store.
"""

from datetime import date, datetime
from typing import Iterable, Optional

from markupsafe import escape
from pydantic import AfterValidator, BeforeValidator
from pydantic_core import PydanticCustomError


def escape_text(value: str) -> str:
    """HTML-escapes a string and hands it back as a plain `str`."""
    return str(escape(value))


def _check_max_length(value: str, max_length: Optional[int], message: Optional[str]) -> None:
    if max_length is not None and len(value) > max_length:
        raise PydanticCustomError("text_too_long", message or f"Must be at most {max_length} characters")


def required_text(
    message: str,
    min_length: int = 1,
    max_length: Optional[int] = None,
    too_long_message: Optional[str] = None,
) -> AfterValidator:
    def _check(value: str) -> str:
        if len(value) < min_length:
            raise PydanticCustomError("text_too_short", message)
        _check_max_length(value, max_length, too_long_message)
        return escape_text(value)
    return AfterValidator(_check)


def alphanumeric_text(
    empty_message: str,
    format_message: str,
    max_length: Optional[int] = None,
    too_long_message: Optional[str] = None,
) -> AfterValidator:
    def _check(value: str) -> str:
        if not value:
            raise PydanticCustomError("text_too_short", empty_message)
        _check_max_length(value, max_length, too_long_message)
        if not value.isalnum():
            raise PydanticCustomError("text_not_alphanumeric", format_message)
        return escape_text(value)
    return AfterValidator(_check)


def escaped_text() -> AfterValidator:
    return AfterValidator(escape_text)


def parse_iso_date(value: str) -> date:
    """
    Parses an ISO-8601 calendar date.

    A full timestamp (`2024-05-01T10:30:00`) is accepted and truncated to its date.
    Raises ValueError when the string is not a valid date.
    """
    try:
        return date.fromisoformat(value)
    except ValueError:
        return datetime.fromisoformat(value).date()


def optional_iso_date(message: str) -> BeforeValidator:
    def _check(value) -> Optional[date]:
        if value is None or isinstance(value, date):
            return value
        if not str(value).strip():
            return None
        try:
            return parse_iso_date(str(value).strip())
        except ValueError:
            raise PydanticCustomError("invalid_date", message)
    return BeforeValidator(_check)


def one_of(choices: Iterable[str], message: str) -> BeforeValidator:
    allowed = {str(choice) for choice in choices}

    def _check(value):
        if str(getattr(value, "value", value)) not in allowed:
            raise PydanticCustomError("invalid_choice", message)
        return value
    return BeforeValidator(_check)
