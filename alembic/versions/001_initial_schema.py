"""Initial schema — memorial profile tables with visit counters.

Revision ID: 001
Revises: None
Create Date: 2026-10-18
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Individual profiles
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("slug", sa.String(200), unique=True, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("is_published", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("visit_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("deleted_at", sa.DateTime, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime,
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint("visit_count >= 0", name="ck_profiles_visit_count"),
    )
    op.create_index("idx_profiles_published", "profiles", ["is_published"])

    # Family profiles
    op.create_table(
        "family_profiles",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("slug", sa.String(200), unique=True, nullable=False),
        sa.Column("family_name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("is_published", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("visit_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("deleted_at", sa.DateTime, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime,
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint("visit_count >= 0", name="ck_family_profiles_visit_count"),
    )
    op.create_index("idx_family_profiles_published", "family_profiles", ["is_published"])


def downgrade() -> None:
    op.drop_table("family_profiles")
    op.drop_table("profiles")
