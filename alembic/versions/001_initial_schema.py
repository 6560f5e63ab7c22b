"""Initial schema — counter entries table.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "counter_entries",
        sa.Column("entity_type", sa.String(128), nullable=False, server_default=""),
        sa.Column("entity_id", sa.Integer, nullable=False, server_default="0"),
        sa.Column("user_id", sa.Integer, nullable=False, server_default="0"),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("value", sa.Numeric, nullable=False, server_default="0"),
        sa.Column("changed", sa.Integer, nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("entity_type", "entity_id", "user_id", "name"),
    )
    op.create_index(
        "idx_counter_entries_scope",
        "counter_entries",
        ["entity_type", "entity_id", "user_id"],
    )


def downgrade() -> None:
    op.drop_index("idx_counter_entries_scope", table_name="counter_entries")
    op.drop_table("counter_entries")
