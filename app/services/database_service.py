# /app/services/database_service.py

"""
The asynchronous facade over the catalog repository.

Every method runs its query on the worker thread pool inside a session of its
own, so a request handler can start several independent lookups at once with
`asyncio.gather` and resume when all of them have finished. Results come back
fully loaded and detached from their session.
"""

from typing import Callable, Dict, Generator, List, Optional, Tuple, TypeVar

from sqlalchemy.orm import sessionmaker
from starlette.concurrency import run_in_threadpool

# --- Core Database Setup ---
from app.db.database import SessionLocal
from app.db.models.catalog_models import Author, Book, BookInstance, Genre

# --- Repository Imports ---
from .database_helpers.catalog_repository_sql import CatalogRepositorySQL

T = TypeVar("T")


class DatabaseService:
    def __init__(self, session_factory: sessionmaker = SessionLocal):
        """
        Initializes the DatabaseService.
        `session_factory` is called once per query; tests pass a factory bound
        to a throwaway database.
        """
        self.session_factory = session_factory

    def _run_in_session(self, operation: Callable[[CatalogRepositorySQL], T]) -> T:
        with self.session_factory() as session:
            return operation(CatalogRepositorySQL(session))

    async def _run(self, operation: Callable[[CatalogRepositorySQL], T]) -> T:
        return await run_in_threadpool(self._run_in_session, operation)

    # --- AUTHOR METHODS (DELEGATED) ---
    async def get_all_authors(self) -> List[Author]: return await self._run(lambda repo: repo.get_all_authors())
    async def get_author_by_id(self, author_id: str) -> Optional[Author]: return await self._run(lambda repo: repo.get_author_by_id(author_id))
    async def count_authors(self) -> int: return await self._run(lambda repo: repo.count_authors())
    async def add_author(self, record: Dict) -> Author: return await self._run(lambda repo: repo.add_author(record))
    async def update_author(self, author_id: str, data: Dict) -> Optional[Author]: return await self._run(lambda repo: repo.update_author(author_id, data))
    async def delete_author(self, author_id: str) -> bool: return await self._run(lambda repo: repo.delete_author(author_id))

    # --- GENRE METHODS (DELEGATED) ---
    async def get_all_genres(self) -> List[Genre]: return await self._run(lambda repo: repo.get_all_genres())
    async def get_genre_by_id(self, genre_id: str) -> Optional[Genre]: return await self._run(lambda repo: repo.get_genre_by_id(genre_id))
    async def get_genre_by_name(self, name: str) -> Optional[Genre]: return await self._run(lambda repo: repo.get_genre_by_name(name))
    async def count_genres(self) -> int: return await self._run(lambda repo: repo.count_genres())
    async def add_genre_if_absent(self, record: Dict) -> Tuple[Genre, bool]: return await self._run(lambda repo: repo.add_genre_if_absent(record))
    async def update_genre(self, genre_id: str, data: Dict) -> Optional[Genre]: return await self._run(lambda repo: repo.update_genre(genre_id, data))
    async def delete_genre(self, genre_id: str) -> bool: return await self._run(lambda repo: repo.delete_genre(genre_id))

    # --- BOOK METHODS (DELEGATED) ---
    async def get_all_books(self) -> List[Book]: return await self._run(lambda repo: repo.get_all_books())
    async def get_book_titles(self) -> List[Book]: return await self._run(lambda repo: repo.get_book_titles())
    async def get_book_by_id(self, book_id: str) -> Optional[Book]: return await self._run(lambda repo: repo.get_book_by_id(book_id))
    async def get_books_by_author(self, author_id: str) -> List[Book]: return await self._run(lambda repo: repo.get_books_by_author(author_id))
    async def get_books_by_genre(self, genre_id: str) -> List[Book]: return await self._run(lambda repo: repo.get_books_by_genre(genre_id))
    async def count_books(self) -> int: return await self._run(lambda repo: repo.count_books())
    async def add_book(self, record: Dict) -> Book: return await self._run(lambda repo: repo.add_book(record))
    async def update_book(self, book_id: str, data: Dict) -> Optional[Book]: return await self._run(lambda repo: repo.update_book(book_id, data))
    async def delete_book(self, book_id: str) -> bool: return await self._run(lambda repo: repo.delete_book(book_id))

    # --- BOOK INSTANCE METHODS (DELEGATED) ---
    async def get_all_book_instances(self) -> List[BookInstance]: return await self._run(lambda repo: repo.get_all_book_instances())
    async def get_book_instance_by_id(self, instance_id: str) -> Optional[BookInstance]: return await self._run(lambda repo: repo.get_book_instance_by_id(instance_id))
    async def get_book_instances_by_book(self, book_id: str) -> List[BookInstance]: return await self._run(lambda repo: repo.get_book_instances_by_book(book_id))
    async def count_book_instances(self, status: Optional[str] = None) -> int: return await self._run(lambda repo: repo.count_book_instances(status))
    async def add_book_instance(self, record: Dict) -> BookInstance: return await self._run(lambda repo: repo.add_book_instance(record))
    async def update_book_instance(self, instance_id: str, data: Dict) -> Optional[BookInstance]: return await self._run(lambda repo: repo.update_book_instance(instance_id, data))
    async def delete_book_instance(self, instance_id: str) -> bool: return await self._run(lambda repo: repo.delete_book_instance(instance_id))


# --- DEPENDENCY PROVIDER ---
def get_db_service() -> Generator[DatabaseService, None, None]:
    """
    FastAPI dependency that provides a DatabaseService instance bound to the
    application's session factory.
    """
    yield DatabaseService(SessionLocal)
