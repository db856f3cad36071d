"""banner colors and logo style

Revision ID: 0002_banner_colors
Revises: 0001_menuscarta
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0002_banner_colors"
down_revision = "0001_menuscarta"
branch_labels = None
depends_on = None


def upgrade() -> None:
    with op.batch_alter_table("promotion_banners") as batch_op:
        batch_op.add_column(sa.Column("background_color", sa.String(length=16), nullable=True))
        batch_op.add_column(sa.Column("text_color", sa.String(length=16), nullable=True))
    op.execute("UPDATE promotion_banners SET background_color = '#FF9500' WHERE background_color IS NULL")
    op.execute("UPDATE promotion_banners SET text_color = '#FFFFFF' WHERE text_color IS NULL")

    with op.batch_alter_table("restaurants") as batch_op:
        batch_op.add_column(
            sa.Column("logo_style", sa.String(length=16), nullable=False, server_default="circular")
        )


def downgrade() -> None:
    with op.batch_alter_table("restaurants") as batch_op:
        batch_op.drop_column("logo_style")
    with op.batch_alter_table("promotion_banners") as batch_op:
        batch_op.drop_column("text_color")
        batch_op.drop_column("background_color")
