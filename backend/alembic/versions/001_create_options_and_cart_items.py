"""Create options and cart_items tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Store options (REST credentials, app icon) and session cart lines.
How:   Portable column types only, so the same migration runs on PostgreSQL
       and on SQLite.

Rollback: downgrade() drops both tables (credentials and open carts are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "options",
        sa.Column(
            "name",
            sa.String(64),
            nullable=False,
            comment="Option name: consumer_key, consumer_secret, icon",
        ),
        sa.Column(
            "value",
            sa.Text(),
            nullable=False,
            server_default=sa.text("''"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("name"),
    )

    op.create_table(
        "cart_items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "session_id",
            sa.String(64),
            nullable=False,
            comment="Value of the pwacommerce_cart_session cookie",
        ),
        sa.Column("product_id", sa.Integer(), nullable=False),
        sa.Column(
            "variation_id",
            sa.Integer(),
            nullable=True,
            comment="NULL for simple products",
        ),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("quantity > 0", name="ck_cart_items_quantity_positive"),
    )

    op.create_index(
        "idx_cart_items_session",
        "cart_items",
        ["session_id", "product_id"],
    )


def downgrade() -> None:
    op.drop_index("idx_cart_items_session", table_name="cart_items")
    op.drop_table("cart_items")
    op.drop_table("options")
