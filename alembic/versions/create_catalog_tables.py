"""Create the catalog tables

Revision ID: 4c1e2a7b9d30
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1e2a7b9d30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create authors, genres, books, book_genres and bookinstances."""
    op.create_table(
        'authors',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('family_name', sa.String(length=100), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('date_of_death', sa.Date(), nullable=True),
    )
    op.create_index('ix_authors_id', 'authors', ['id'])
    op.create_index('ix_authors_family_name', 'authors', ['family_name'])

    op.create_table(
        'genres',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('name_key', sa.String(length=100), nullable=False),
    )
    op.create_index('ix_genres_id', 'genres', ['id'])
    # The case-insensitive uniqueness of genre names is enforced here.
    op.create_index('ix_genres_name_key', 'genres', ['name_key'], unique=True)

    op.create_table(
        'books',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('summary', sa.Text(), nullable=False),
        sa.Column('isbn', sa.String(), nullable=False),
        sa.Column('author_id', sa.String(), sa.ForeignKey('authors.id'), nullable=False),
    )
    op.create_index('ix_books_id', 'books', ['id'])
    op.create_index('ix_books_title', 'books', ['title'])
    op.create_index('ix_books_author_id', 'books', ['author_id'])

    op.create_table(
        'book_genres',
        sa.Column('book_id', sa.String(), sa.ForeignKey('books.id'), primary_key=True),
        sa.Column('genre_id', sa.String(), sa.ForeignKey('genres.id'), primary_key=True),
    )

    op.create_table(
        'bookinstances',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('book_id', sa.String(), sa.ForeignKey('books.id'), nullable=False),
        sa.Column('imprint', sa.String(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('due_back', sa.Date(), nullable=True),
        sa.CheckConstraint(
            "status IN ('Available', 'Maintenance', 'Loaned', 'Reserved')",
            name='ck_bookinstances_status',
        ),
    )
    op.create_index('ix_bookinstances_id', 'bookinstances', ['id'])
    op.create_index('ix_bookinstances_book_id', 'bookinstances', ['book_id'])
    op.create_index('ix_bookinstances_status', 'bookinstances', ['status'])


def downgrade() -> None:
    """Drop every catalog table."""
    op.drop_table('bookinstances')
    op.drop_table('book_genres')
    op.drop_table('books')
    op.drop_table('genres')
    op.drop_table('authors')
