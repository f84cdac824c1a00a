# /app/routers/rendering.py

"""
Turns service outcomes into HTTP responses.

`RenderView` becomes an HTML page rendered by Jinja2, `RedirectTo` becomes a
302 redirect. Form bodies are read into a plain dict where a field submitted
more than once (checkbox groups) becomes a list.
"""

from typing import Any, Dict, Union

from fastapi import Request, status
from fastapi.responses import RedirectResponse, Response
from fastapi.templating import Jinja2Templates
from markupsafe import Markup

from app.core.config import CATALOG_PREFIX, TEMPLATES_DIR
from ..models.view_model import RedirectTo, RenderView

templates = Jinja2Templates(directory=TEMPLATES_DIR)
templates.env.globals["catalog_prefix"] = CATALOG_PREFIX


def unescape_stored(value: Any) -> Any:
    """
    Undoes the escaping applied when a value was validated, so that a form
    pre-filled with it submits the original text and stays stable across edits.
    Autoescape still escapes the result once on output.
    """
    if isinstance(value, str):
        return Markup(value).unescape()
    return value


templates.env.filters["unescape"] = unescape_stored


def respond(request: Request, outcome: Union[RenderView, RedirectTo]) -> Response:
    if isinstance(outcome, RedirectTo):
        return RedirectResponse(url=outcome.url, status_code=status.HTTP_302_FOUND)
    return templates.TemplateResponse(
        request,
        f"{outcome.template}.html",
        outcome.context,
        status_code=outcome.status_code,
    )


async def read_form(request: Request) -> Dict[str, Any]:
    form = await request.form()
    data: Dict[str, Any] = {}
    for key in form.keys():
        values = form.getlist(key)
        data[key] = values if len(values) > 1 else values[0]
    return data
