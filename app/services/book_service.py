# /app/services/book_service.py

"""
Business logic for books.

A book can only be deleted once no physical copy (BookInstance) refers to it.
Its form offers every author and every genre, with the genres already on the
book pre-checked.
"""

import asyncio
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from app.core.config import CATALOG_PREFIX
from ..models.book_model import BookForm
from ..models.view_model import FieldError
from .catalog_helpers.controller_base import EntityController
from .catalog_helpers.validation import as_list

MISSING_AUTHOR_MESSAGE = "Selected author does not exist"
MISSING_GENRE_MESSAGE = "Selected genre does not exist"


def mark_checked_genres(genres: Iterable[Any], selected_ids: Iterable[str]) -> List[Dict[str, Any]]:
    """
    Builds the genre checkbox options for the book form.
    A genre is checked when its id is among `selected_ids`.
    """
    selected = set(selected_ids)
    return [{"id": genre.id, "name": genre.name, "checked": genre.id in selected} for genre in genres]


class BookController(EntityController):
    entity_label = "Book"
    template_prefix = "book"
    context_key = "book"
    list_key = "book_list"
    dependents_key = "book_instances"
    id_prefix = "book"
    form_model = BookForm
    list_fields = ("genre",)

    list_title = "Book List"
    create_title = "Create Book"
    update_title = "Update Book"
    delete_title = "Delete Book"

    @property
    def list_url(self) -> str:
        return f"{CATALOG_PREFIX}/books"

    async def fetch_all(self):
        return await self.db.get_all_books()

    async def fetch_one(self, entity_id: str):
        return await self.db.get_book_by_id(entity_id)

    async def fetch_with_dependents(self, entity_id: str):
        book, instances = await asyncio.gather(
            self.db.get_book_by_id(entity_id),
            self.db.get_book_instances_by_book(entity_id),
        )
        return book, instances

    async def insert(self, record: Dict):
        return await self.db.add_book(record)

    async def replace(self, entity_id: str, record: Dict):
        return await self.db.update_book(entity_id, record)

    async def remove(self, entity_id: str) -> bool:
        return await self.db.delete_book(entity_id)

    async def reference_errors(self, form: BookForm) -> List[FieldError]:
        author, genres = await asyncio.gather(
            self.db.get_author_by_id(form.author),
            self.db.get_all_genres(),
        )
        errors = []
        if author is None:
            errors.append(FieldError(field="author", message=MISSING_AUTHOR_MESSAGE))
        known_genres = {genre.id for genre in genres}
        if any(genre_id not in known_genres for genre_id in form.genre):
            errors.append(FieldError(field="genre", message=MISSING_GENRE_MESSAGE))
        return errors

    def detail_page_title(self, entity) -> str:
        return entity.title

    def selection_from(self, entity) -> Dict[str, Any]:
        return {"author": entity.author_id, "genre": entity.genre_ids}

    def _lookups(self, authors, genres, selection: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "authors": authors,
            "genres": mark_checked_genres(genres, as_list(selection.get("genre"))),
            "selected_author": selection.get("author"),
        }

    async def form_lookups(self, selection: Mapping[str, Any]) -> Dict[str, Any]:
        authors, genres = await asyncio.gather(self.db.get_all_authors(), self.db.get_all_genres())
        return self._lookups(authors, genres, selection)

    async def fetch_for_update(self, entity_id: str) -> Tuple[Optional[Any], Dict[str, Any]]:
        book, authors, genres = await asyncio.gather(
            self.db.get_book_by_id(entity_id),
            self.db.get_all_authors(),
            self.db.get_all_genres(),
        )
        if book is None:
            return None, {}
        return book, self._lookups(authors, genres, self.selection_from(book))
