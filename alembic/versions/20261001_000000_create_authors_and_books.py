"""
Create authors and books tables.

Revision ID: 20261001_000000_create_authors_and_books
Revises:
Create Date: 2026-10-01 00:00:00
"""

import sqlalchemy as sa

from alembic import op  # type: ignore[reportMissingImports]

# revision identifiers, used by Alembic.
revision = "20261001_000000_create_authors_and_books"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "authors",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_authors")),
    )

    # author_id is a soft reference: no foreign key constraint
    op.create_table(
        "books",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("genre", sa.String(length=255), nullable=True),
        sa.Column("author_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_books")),
    )
    op.create_index("idx_books_author_id", "books", ["author_id"])


def downgrade() -> None:
    op.drop_index("idx_books_author_id", table_name="books")
    op.drop_table("books")
    op.drop_table("authors")
