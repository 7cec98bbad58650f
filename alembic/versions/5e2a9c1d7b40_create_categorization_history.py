"""Create categorization_history table.

Revision ID: 5e2a9c1d7b40
Revises:
Create Date: 2026-10-19
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "5e2a9c1d7b40"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "categorization_history",
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=False),
        sa.Column("suggested_category", sa.String(length=100), nullable=False),
        sa.Column("final_category", sa.String(length=100), nullable=False),
        sa.Column("was_corrected", sa.Boolean(), nullable=False),
        sa.Column("confidence", sa.Float(), nullable=False),
        sa.Column("method", sa.String(length=50), nullable=False),
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_categorization_history_user_id",
        "categorization_history",
        ["user_id"],
        unique=False,
    )
    # Pattern extraction reads a user's latest outcomes.
    op.create_index(
        "ix_categorization_history_user_id_created_at",
        "categorization_history",
        ["user_id", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(
        "ix_categorization_history_user_id_created_at", table_name="categorization_history"
    )
    op.drop_index("ix_categorization_history_user_id", table_name="categorization_history")
    op.drop_table("categorization_history")
