"""menuscarta schema

Revision ID: 0001_menuscarta
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_menuscarta"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "restaurants",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("slug", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column(
            "subscription_status",
            sa.Enum("active", "cancelled", "suspended", name="subscription_status"),
            nullable=False,
            server_default="active",
        ),
        sa.Column("owner_email", sa.String(length=255), nullable=True),
        sa.Column("currency", sa.String(length=3), nullable=True),
        sa.Column("timezone", sa.String(length=64), nullable=True),
        sa.Column("theme_id", sa.String(length=32), nullable=True),
        sa.Column("logo_url", sa.String(length=500), nullable=True),
        sa.Column("ingredient_categories", sa.JSON(), nullable=True),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("is_demo", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_restaurants_slug", "restaurants", ["slug"], unique=True)

    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("restaurant_id", sa.Integer(), sa.ForeignKey("restaurants.id"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("icon", sa.String(length=64), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("is_visible", sa.Boolean(), nullable=False, server_default=sa.text("1")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_categories_restaurant_id", "categories", ["restaurant_id"])

    op.create_table(
        "menu_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("restaurant_id", sa.Integer(), sa.ForeignKey("restaurants.id"), nullable=False),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("base_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("discount_percentage", sa.Numeric(5, 2), nullable=True),
        sa.Column("image_url", sa.String(length=500), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.text("1")),
        sa.Column("is_promotion", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("calories", sa.Integer(), nullable=True),
        sa.Column("preparation_time", sa.Integer(), nullable=True),
        sa.Column("spicy_level", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("is_vegetarian", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("is_vegan", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("is_gluten_free", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("allergens", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_menu_items_restaurant_id", "menu_items", ["restaurant_id"])
    op.create_index("ix_menu_items_category_id", "menu_items", ["category_id"])

    op.create_table(
        "item_ingredients",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("item_id", sa.Integer(), sa.ForeignKey("menu_items.id"), nullable=False),
        sa.Column("ingredient_id", sa.String(length=128), nullable=False),
        sa.Column("is_optional", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.UniqueConstraint("item_id", "ingredient_id", name="uq_item_ingredient"),
    )
    op.create_index("ix_item_ingredients_item_id", "item_ingredients", ["item_id"])

    op.create_table(
        "ingredients",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("restaurant_id", sa.Integer(), sa.ForeignKey("restaurants.id"), nullable=False),
        sa.Column("ingredient_id", sa.String(length=128), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=64), nullable=False),
        sa.Column("is_allergen", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.UniqueConstraint("restaurant_id", "ingredient_id", name="uq_restaurant_ingredient"),
    )
    op.create_index("ix_ingredients_restaurant_id", "ingredients", ["restaurant_id"])

    op.create_table(
        "unavailable_ingredients",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("restaurant_id", sa.Integer(), sa.ForeignKey("restaurants.id"), nullable=False),
        sa.Column("ingredient_id", sa.String(length=128), nullable=False),
        sa.Column("reason", sa.String(length=255), nullable=True),
        sa.Column("marked_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("restaurant_id", "ingredient_id", name="uq_unavailable_ingredient"),
    )
    op.create_index("ix_unavailable_ingredients_restaurant_id", "unavailable_ingredients", ["restaurant_id"])

    op.create_table(
        "scheduled_discounts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("restaurant_id", sa.Integer(), sa.ForeignKey("restaurants.id"), nullable=False),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("discount_percentage", sa.Numeric(5, 2), nullable=False),
        sa.Column("days_of_week", sa.JSON(), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("1")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_scheduled_discounts_restaurant_id", "scheduled_discounts", ["restaurant_id"])
    op.create_index("ix_scheduled_discounts_category_id", "scheduled_discounts", ["category_id"])

    op.create_table(
        "promotion_banners",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("restaurant_id", sa.Integer(), sa.ForeignKey("restaurants.id"), nullable=False, unique=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("subtitle", sa.String(length=255), nullable=True),
        sa.Column("is_visible", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("promotion_banners")
    op.drop_index("ix_scheduled_discounts_category_id", table_name="scheduled_discounts")
    op.drop_index("ix_scheduled_discounts_restaurant_id", table_name="scheduled_discounts")
    op.drop_table("scheduled_discounts")
    op.drop_index("ix_unavailable_ingredients_restaurant_id", table_name="unavailable_ingredients")
    op.drop_table("unavailable_ingredients")
    op.drop_index("ix_ingredients_restaurant_id", table_name="ingredients")
    op.drop_table("ingredients")
    op.drop_index("ix_item_ingredients_item_id", table_name="item_ingredients")
    op.drop_table("item_ingredients")
    op.drop_index("ix_menu_items_category_id", table_name="menu_items")
    op.drop_index("ix_menu_items_restaurant_id", table_name="menu_items")
    op.drop_table("menu_items")
    op.drop_index("ix_categories_restaurant_id", table_name="categories")
    op.drop_table("categories")
    op.drop_index("ix_restaurants_slug", table_name="restaurants")
    op.drop_table("restaurants")
    sa.Enum(name="subscription_status").drop(op.get_bind(), checkfirst=True)
