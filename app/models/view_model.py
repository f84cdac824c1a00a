# /app/models/view_model.py

"""
Data contracts passed between the catalog services and the routers.

A service never builds an HTTP response itself. It returns either a
`RenderView` (render this template with this data) or a `RedirectTo`
(send the browser elsewhere); the router layer turns those into responses.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from pydantic import BaseModel, Field


class FieldError(BaseModel):
    """A single failed validation rule, reported back to the form."""
    field: str = Field(..., description="Name of the form field that failed.")
    message: str = Field(..., description="Human-readable explanation shown next to the form.")


@dataclass
class RenderView:
    template: str
    context: Dict[str, Any] = field(default_factory=dict)
    status_code: int = 200


@dataclass
class RedirectTo:
    url: str
