"""Category tree, attributes, article assignments and assignment backlog.

Revision ID: 0001_category_tree
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_category_tree"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "category",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.Column("path", sa.String(), nullable=True),
        sa.Column("description", sa.String(length=255), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("added", sa.DateTime(timezone=True), nullable=False),
        sa.Column("changed", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["parent_id"], ["category.id"], name="fk_category_parent_id_category"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_category"),
        sa.UniqueConstraint("parent_id", "description", name="uq_category_parent_id"),
    )
    op.create_index("ix_category_parent_id", "category", ["parent_id"])

    op.create_table(
        "category_attribute",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["category_id"],
            ["category.id"],
            name="fk_category_attribute_category_id_category",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_category_attribute"),
        sa.UniqueConstraint("category_id", name="uq_category_attribute_category_id"),
    )

    op.create_table(
        "article_category",
        sa.Column("article_id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("category_id", sa.Integer(), autoincrement=False, nullable=False),
        sa.ForeignKeyConstraint(
            ["category_id"],
            ["category.id"],
            name="fk_article_category_category_id_category",
        ),
        sa.PrimaryKeyConstraint("article_id", "category_id", name="pk_article_category"),
    )
    op.create_index("ix_article_category_category_id", "article_category", ["category_id"])

    op.create_table(
        "assignment_backlog",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "change",
            sa.Enum("ADDED", "REMOVED", name="assignmentchange", native_enum=False, length=16),
            nullable=False,
        ),
        sa.Column("article_id", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_assignment_backlog"),
    )


def downgrade() -> None:
    op.drop_table("assignment_backlog")
    op.drop_index("ix_article_category_category_id", table_name="article_category")
    op.drop_table("article_category")
    op.drop_table("category_attribute")
    op.drop_index("ix_category_parent_id", table_name="category")
    op.drop_table("category")
