# /app/db/models/catalog_models.py

"""
This module defines the SQLAlchemy ORM models for the four catalog entities:
`Author`, `Genre`, `Book` and `BookInstance` (a physical copy of a book).

References between entities are plain foreign keys. Nothing cascades on
delete; the services refuse to delete a record while dependents still point
at it.
"""

import unicodedata

from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, String, Table, Text
from sqlalchemy.orm import relationship, validates

from app.core.config import CATALOG_PREFIX
from ..base_class import Base

BOOK_INSTANCE_STATUSES = ("Available", "Maintenance", "Loaned", "Reserved")


def genre_name_key(name: str) -> str:
    """
    Normalises a genre name for case-insensitive comparison.

    Case is folded, accents are kept ("Fantasy" == "FANTASY", "Fantasy" != "Fäntasy").
    """
    return unicodedata.normalize("NFC", name or "").casefold()


# Association table for the Book <-> Genre many-to-many link.
book_genres = Table(
    "book_genres",
    Base.metadata,
    Column("book_id", String, ForeignKey("books.id"), primary_key=True),
    Column("genre_id", String, ForeignKey("genres.id"), primary_key=True),
)


class Author(Base):
    """SQLAlchemy model representing an author."""
    id = Column(String, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    family_name = Column(String(100), nullable=False, index=True)
    date_of_birth = Column(Date, nullable=True)
    date_of_death = Column(Date, nullable=True)

    @property
    def name(self) -> str:
        # An empty string is returned rather than a half-built name.
        if self.first_name and self.family_name:
            return f"{self.family_name}, {self.first_name}"
        return ""

    @property
    def lifespan(self) -> str:
        birth = self.date_of_birth.isoformat() if self.date_of_birth else ""
        death = self.date_of_death.isoformat() if self.date_of_death else ""
        return f"{birth} - {death}"

    @property
    def url(self) -> str:
        return f"{CATALOG_PREFIX}/author/{self.id}"


class Genre(Base):
    """
    SQLAlchemy model representing a genre.

    `name_key` holds the case-folded name and carries the unique constraint
    that keeps genre names unique regardless of letter case. It is kept in
    sync with `name` automatically.
    """
    id = Column(String, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    name_key = Column(String(100), nullable=False, unique=True, index=True)

    @validates("name")
    def _sync_name_key(self, key, value):
        self.name_key = genre_name_key(value)
        return value

    @property
    def url(self) -> str:
        return f"{CATALOG_PREFIX}/genre/{self.id}"


class Book(Base):
    """SQLAlchemy model representing a book (a title, not a physical copy)."""
    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    summary = Column(Text, nullable=False)
    isbn = Column(String, nullable=False)
    author_id = Column(String, ForeignKey("authors.id"), nullable=False, index=True)

    author = relationship("Author")
    genres = relationship("Genre", secondary=book_genres, order_by="Genre.name")

    @property
    def genre_ids(self):
        return [genre.id for genre in self.genres]

    @property
    def url(self) -> str:
        return f"{CATALOG_PREFIX}/book/{self.id}"


class BookInstance(Base):
    """
    SQLAlchemy model representing one physical copy of a Book.

    `status` is a closed set of values, enforced both by the form model and
    by a check constraint.
    """
    __table_args__ = (
        CheckConstraint(
            "status IN ('Available', 'Maintenance', 'Loaned', 'Reserved')",
            name="ck_bookinstances_status",
        ),
    )

    id = Column(String, primary_key=True, index=True)
    book_id = Column(String, ForeignKey("books.id"), nullable=False, index=True)
    imprint = Column(String, nullable=False)
    status = Column(String(20), nullable=False, default="Maintenance", index=True)
    due_back = Column(Date, nullable=True)

    book = relationship("Book")

    @property
    def due_back_formatted(self) -> str:
        if not self.due_back:
            return ""
        return f"{self.due_back.strftime('%b')} {self.due_back.day}, {self.due_back.year}"

    @property
    def url(self) -> str:
        return f"{CATALOG_PREFIX}/bookinstance/{self.id}"
