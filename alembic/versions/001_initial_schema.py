"""Initial schema - all core tables

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates:
- ingredients
- dishes
- dish_ingredients
- completed_foods
- food_dishes
- memos
- users
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # === INGREDIENTS ===
    op.create_table(
        "ingredients",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("store", sa.String(100), nullable=False),
        sa.Column("quantity", sa.Numeric(10, 3), nullable=False),
        sa.Column("unit", sa.String(20), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("unit_price", sa.Numeric(12, 4), nullable=False, server_default="0"),
        sa.Column("genre", sa.String(20), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP, server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP, server_default=sa.func.now()),
        sa.UniqueConstraint("name", "store", "unit", name="uk_ingredient"),
        sa.CheckConstraint("quantity > 0", name="ck_ingredients_quantity_positive"),
        sa.CheckConstraint("price > 0", name="ck_ingredients_price_positive"),
    )
    op.create_index("idx_ingredients_genre", "ingredients", ["genre"])
    op.create_index("idx_ingredients_name", "ingredients", ["name"])

    # === DISHES ===
    op.create_table(
        "dishes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("genre", sa.String(50), nullable=False, server_default="main"),
        sa.Column("description", sa.Text),
        sa.Column("total_cost", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("created_at", sa.TIMESTAMP, server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP, server_default=sa.func.now()),
    )
    op.create_index("idx_dishes_genre", "dishes", ["genre"])

    op.create_table(
        "dish_ingredients",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "dish_id",
            sa.Integer,
            sa.ForeignKey("dishes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("ingredient_id", sa.Integer, sa.ForeignKey("ingredients.id"), nullable=False),
        sa.Column("used_quantity", sa.Numeric(10, 3), nullable=False),
        sa.Column("used_cost", sa.Numeric(12, 2), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP, server_default=sa.func.now()),
        sa.CheckConstraint("used_quantity > 0", name="ck_dish_ingredients_quantity_positive"),
    )
    op.create_index("idx_dish_ingredients_dish", "dish_ingredients", ["dish_id"])
    op.create_index("idx_dish_ingredients_ingredient", "dish_ingredients", ["ingredient_id"])

    # === COMPLETED FOODS ===
    op.create_table(
        "completed_foods",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("price", sa.Numeric(12, 2)),
        sa.Column("total_cost", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("description", sa.Text),
        sa.Column("created_at", sa.TIMESTAMP, server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP, server_default=sa.func.now()),
    )

    op.create_table(
        "food_dishes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "food_id",
            sa.Integer,
            sa.ForeignKey("completed_foods.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("dish_id", sa.Integer, sa.ForeignKey("dishes.id"), nullable=False),
        sa.Column("usage_quantity", sa.Numeric(10, 3), nullable=False),
        sa.Column("usage_unit", sa.String(10), nullable=False, server_default="serving"),
        sa.Column("usage_cost", sa.Numeric(12, 2), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("created_at", sa.TIMESTAMP, server_default=sa.func.now()),
        sa.CheckConstraint("usage_quantity > 0", name="ck_food_dishes_quantity_positive"),
        sa.CheckConstraint("usage_unit IN ('ratio', 'serving')", name="ck_food_dishes_usage_unit"),
    )
    op.create_index("idx_food_dishes_food", "food_dishes", ["food_id"])
    op.create_index("idx_food_dishes_dish", "food_dishes", ["dish_id"])

    # === MEMOS ===
    op.create_table(
        "memos",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("created_at", sa.TIMESTAMP, server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP, server_default=sa.func.now()),
    )

    # === USERS === (reserved for authentication; no API yet)
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(50), nullable=False, unique=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column("created_at", sa.TIMESTAMP, server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("users")
    op.drop_table("memos")
    op.drop_index("idx_food_dishes_dish", table_name="food_dishes")
    op.drop_index("idx_food_dishes_food", table_name="food_dishes")
    op.drop_table("food_dishes")
    op.drop_table("completed_foods")
    op.drop_index("idx_dish_ingredients_ingredient", table_name="dish_ingredients")
    op.drop_index("idx_dish_ingredients_dish", table_name="dish_ingredients")
    op.drop_table("dish_ingredients")
    op.drop_index("idx_dishes_genre", table_name="dishes")
    op.drop_table("dishes")
    op.drop_index("idx_ingredients_name", table_name="ingredients")
    op.drop_index("idx_ingredients_genre", table_name="ingredients")
    op.drop_table("ingredients")
