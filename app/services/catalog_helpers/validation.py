# /app/services/catalog_helpers/validation.py

"""
The form validation layer.

Submitted form data goes through two steps before anything is written:
`normalize_form` trims every value and coerces multi-valued fields into lists,
then `validate_form` runs the entity's pydantic form model. A failed
validation is not an exception for the caller: it gets back the list of
`FieldError`s plus the entered values, ready to re-render the form.
"""

import uuid
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ...models.form_fields import escape_text
from ...models.view_model import FieldError

FormModel = TypeVar("FormModel", bound=BaseModel)


def new_entity_id(prefix: str) -> str:
    """Generates a new record id such as `book_3f9c0a1b2d4e`."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def as_list(value: Any) -> List[Any]:
    """Absent -> [], a single value -> [value], a sequence -> list(sequence)."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _trim(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        value = value[-1] if value else ""
    return value.strip() if isinstance(value, str) else value


def normalize_form(raw: Mapping[str, Any], list_fields: Iterable[str] = ()) -> Dict[str, Any]:
    list_fields = set(list_fields)
    values = {key: _trim(value) for key, value in raw.items() if key not in list_fields}
    for key in list_fields:
        values[key] = [_trim(item) for item in as_list(raw.get(key))]
    return values


def escape_values(values: Mapping[str, Any]) -> Dict[str, Any]:
    """HTML-escapes entered values so they can be echoed back into a form."""
    escaped = {}
    for key, value in values.items():
        if isinstance(value, list):
            escaped[key] = [escape_text(item) if isinstance(item, str) else item for item in value]
        elif isinstance(value, str):
            escaped[key] = escape_text(value)
        else:
            escaped[key] = value
    return escaped


def collect_field_errors(exc: ValidationError) -> List[FieldError]:
    errors = []
    for error in exc.errors():
        location = error.get("loc") or ("__all__",)
        errors.append(FieldError(field=str(location[0]), message=error["msg"]))
    return errors


def validate_form(
    model: Type[FormModel], values: Mapping[str, Any]
) -> Tuple[Optional[FormModel], List[FieldError]]:
    """
    Runs a form model over normalised values.

    Returns `(form, [])` on success and `(None, errors)` otherwise.
    """
    try:
        return model.model_validate(dict(values)), []
    except ValidationError as exc:
        return None, collect_field_errors(exc)
