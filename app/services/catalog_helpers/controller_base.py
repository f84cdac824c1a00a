# /app/services/catalog_helpers/controller_base.py

"""
The shared shape of every catalog controller.

Each entity (Book, Author, Genre, BookInstance) supports the same operations:
list, detail, create (GET/POST), delete (GET/POST) and update (GET/POST). The
flow around those operations lives here once; the per-entity subclasses only
say how to load their records, which lookups their form needs, and what
counts as a dependent that blocks deletion.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, Union

from pydantic import BaseModel

from ...models.view_model import FieldError, RedirectTo, RenderView
from ..database_service import DatabaseService
from .errors import EntityNotFoundError
from .validation import escape_values, new_entity_id, normalize_form, validate_form

logger = logging.getLogger(__name__)

Outcome = Union[RenderView, RedirectTo]


class MissingPolicy(str, Enum):
    """What an operation does when the requested record does not exist."""
    NOT_FOUND = "not_found"
    REDIRECT_TO_LIST = "redirect_to_list"


DEFAULT_MISSING_POLICIES = {
    "detail": MissingPolicy.NOT_FOUND,
    "update_get": MissingPolicy.NOT_FOUND,
    "update_post": MissingPolicy.NOT_FOUND,
    "delete_get": MissingPolicy.REDIRECT_TO_LIST,
    "delete_post": MissingPolicy.REDIRECT_TO_LIST,
}


class EntityController(ABC):
    # --- Per-entity configuration ---
    entity_label: str = ""        # "Book", used in messages and logs
    template_prefix: str = ""     # "book" -> book_list, book_detail, ...
    context_key: str = ""         # name of the record in template data
    list_key: str = ""            # name of the list in the *_list template
    dependents_key: Optional[str] = None
    id_prefix: str = ""
    form_model: Type[BaseModel] = BaseModel
    list_fields: Tuple[str, ...] = ()
    missing_policies: Dict[str, MissingPolicy] = DEFAULT_MISSING_POLICIES

    list_title = ""
    detail_title = ""
    create_title = ""
    update_title = ""
    delete_title = ""

    def __init__(self, db: DatabaseService):
        self.db = db

    # --- Hooks for subclasses ---

    @property
    @abstractmethod
    def list_url(self) -> str:
        ...

    @abstractmethod
    async def fetch_all(self) -> List[Any]:
        ...

    @abstractmethod
    async def fetch_one(self, entity_id: str) -> Optional[Any]:
        ...

    @abstractmethod
    async def insert(self, record: Dict) -> Any:
        ...

    @abstractmethod
    async def replace(self, entity_id: str, record: Dict) -> Optional[Any]:
        ...

    @abstractmethod
    async def remove(self, entity_id: str) -> bool:
        ...

    async def fetch_with_dependents(self, entity_id: str) -> Tuple[Optional[Any], List[Any]]:
        """Loads a record together with the records that block its deletion."""
        return await self.fetch_one(entity_id), []

    async def fetch_detail(self, entity_id: str) -> Tuple[Optional[Any], Dict[str, Any]]:
        entity, dependents = await self.fetch_with_dependents(entity_id)
        extra = {self.dependents_key: dependents} if self.dependents_key else {}
        return entity, extra

    async def form_lookups(self, selection: Mapping[str, Any]) -> Dict[str, Any]:
        """Data the form needs besides the record itself (select options, ...)."""
        return {}

    def selection_from(self, entity: Any) -> Dict[str, Any]:
        """The references currently chosen on a stored record, keyed like the form fields."""
        return {}

    async def fetch_for_update(self, entity_id: str) -> Tuple[Optional[Any], Dict[str, Any]]:
        entity = await self.fetch_one(entity_id)
        if entity is None:
            return None, {}
        return entity, await self.form_lookups(self.selection_from(entity))

    async def reference_errors(self, form: BaseModel) -> List[FieldError]:
        """
        Checks that the records a valid form points at still exist. A form can
        be stale: the referenced record may have been deleted since it was
        rendered.
        """
        return []

    def detail_page_title(self, entity: Any) -> str:
        return self.detail_title

    # --- Shared helpers ---

    def _template(self, suffix: str) -> str:
        return f"{self.template_prefix}_{suffix}"

    def _on_missing(self, operation: str, entity_id: str) -> RedirectTo:
        """Applies the operation's missing-record policy."""
        policy = self.missing_policies[operation]
        logger.info("%s %s not found during %s (%s)", self.entity_label, entity_id, operation, policy.value)
        if policy is MissingPolicy.REDIRECT_TO_LIST:
            return RedirectTo(self.list_url)
        raise EntityNotFoundError(self.entity_label, entity_id)

    async def render_form(
        self,
        title: str,
        values: Mapping[str, Any],
        errors: List[FieldError],
        entity_id: Optional[str] = None,
    ) -> RenderView:
        """
        Re-renders the form with the values the user entered and the list of
        errors. On update the record id is kept, so the form still edits the
        same record.
        """
        entered = escape_values(values)
        entered["id"] = entity_id
        context = {"title": title, self.context_key: entered, "errors": errors}
        context.update(await self.form_lookups(entered))
        return RenderView(self._template("form"), context)

    def _delete_view(self, entity: Any, dependents: List[Any]) -> RenderView:
        context = {"title": self.delete_title, self.context_key: entity}
        if self.dependents_key:
            context[self.dependents_key] = dependents
        return RenderView(self._template("delete"), context)

    # --- The five operations ---

    async def list(self) -> RenderView:
        records = await self.fetch_all()
        return RenderView(self._template("list"), {"title": self.list_title, self.list_key: records})

    async def detail(self, entity_id: str) -> Outcome:
        entity, extra = await self.fetch_detail(entity_id)
        if entity is None:
            return self._on_missing("detail", entity_id)
        context = {"title": self.detail_page_title(entity), self.context_key: entity}
        context.update(extra)
        return RenderView(self._template("detail"), context)

    async def create_get(self) -> RenderView:
        context = {"title": self.create_title}
        context.update(await self.form_lookups({}))
        return RenderView(self._template("form"), context)

    async def create_post(self, raw: Mapping[str, Any]) -> Outcome:
        values = normalize_form(raw, self.list_fields)
        form, errors = validate_form(self.form_model, values)
        if not errors:
            errors = await self.reference_errors(form)
        if errors:
            return await self.render_form(self.create_title, values, errors)
        return await self.save_new(form, values)

    async def save_new(self, form: BaseModel, values: Mapping[str, Any]) -> Outcome:
        record = form.to_record()
        record["id"] = new_entity_id(self.id_prefix)
        entity = await self.insert(record)
        logger.info("Created %s %s", self.entity_label, entity.id)
        return RedirectTo(entity.url)

    async def delete_get(self, entity_id: str) -> Outcome:
        entity, dependents = await self.fetch_with_dependents(entity_id)
        if entity is None:
            return self._on_missing("delete_get", entity_id)
        return self._delete_view(entity, dependents)

    async def delete_post(self, entity_id: str) -> Outcome:
        """
        Deletes the record unless something still references it.

        Dependents are re-read here rather than trusted from the confirmation
        page, which may be stale. When any remain, the confirmation view is
        shown again and nothing is deleted.
        """
        entity, dependents = await self.fetch_with_dependents(entity_id)
        if entity is None:
            return self._on_missing("delete_post", entity_id)
        if dependents:
            logger.warning(
                "Refused to delete %s %s: %d dependent record(s) remain",
                self.entity_label, entity_id, len(dependents),
            )
            return self._delete_view(entity, dependents)
        await self.remove(entity_id)
        logger.info("Deleted %s %s", self.entity_label, entity_id)
        return RedirectTo(self.list_url)

    async def update_get(self, entity_id: str) -> Outcome:
        entity, lookups = await self.fetch_for_update(entity_id)
        if entity is None:
            return self._on_missing("update_get", entity_id)
        context = {"title": self.update_title, self.context_key: entity}
        context.update(lookups)
        return RenderView(self._template("form"), context)

    async def update_post(self, entity_id: str, raw: Mapping[str, Any]) -> Outcome:
        values = normalize_form(raw, self.list_fields)
        form, errors = validate_form(self.form_model, values)
        if not errors:
            errors = await self.reference_errors(form)
        if errors:
            return await self.render_form(self.update_title, values, errors, entity_id=entity_id)
        return await self.save_existing(entity_id, form, values)

    async def save_existing(self, entity_id: str, form: BaseModel, values: Mapping[str, Any]) -> Outcome:
        entity = await self.replace(entity_id, form.to_record())
        if entity is None:
            return self._on_missing("update_post", entity_id)
        logger.info("Updated %s %s", self.entity_label, entity_id)
        return RedirectTo(entity.url)
