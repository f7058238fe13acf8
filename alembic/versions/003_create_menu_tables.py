"""create menu_categories, menu_items, prefixed_menus; seed default categories

Revision ID: 003
Revises: 002
Create Date: 2026-09-29

"""
import uuid
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DEFAULT_CATEGORIES = [
    ("appetizers", "Appetizers"),
    ("salads", "Salads"),
    ("caviar", "Caviar"),
    ("chilled_seafood", "Chilled Seafood"),
    ("steaks", "Steaks"),
    ("main_courses", "Main Courses"),
    ("sides", "Sides"),
    ("additions", "Additions"),
    ("sauces", "Sauces"),
]


def upgrade() -> None:
    categories = op.create_table(
        "menu_categories",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("slug", sa.String(50), unique=True, nullable=False, index=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_table(
        "menu_items",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("category_id", sa.String(36), sa.ForeignKey("menu_categories.id"), nullable=False, index=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Float(), nullable=True),
        sa.Column("currency", sa.String(3), nullable=False, server_default="CAD"),
        sa.Column("allergens", sa.JSON(), nullable=True),
        sa.Column("common_mods", sa.JSON(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("program", sa.String(100), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_unavailable", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("country", sa.String(10), nullable=True),
        sa.Column("origin", sa.String(200), nullable=True),
        sa.Column("cut", sa.String(100), nullable=True),
        sa.Column("weight_oz", sa.Float(), nullable=True),
        sa.Column("aging_days", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_table(
        "prefixed_menus",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False, server_default="Pre-Fixed Menu"),
        sa.Column("courses", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.bulk_insert(
        categories,
        [
            {"id": str(uuid.uuid4()), "slug": slug, "name": name, "sort_order": i}
            for i, (slug, name) in enumerate(DEFAULT_CATEGORIES)
        ],
    )


def downgrade() -> None:
    op.drop_table("prefixed_menus")
    op.drop_table("menu_items")
    op.drop_table("menu_categories")
