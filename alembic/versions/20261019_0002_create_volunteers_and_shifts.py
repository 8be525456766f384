"""create volunteers and volunteer_shifts tables

Revision ID: 20261019_0002
Revises: 20261019_0001
Create Date: 2026-10-19 09:30:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_0002"
down_revision = "20261019_0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "volunteers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("address", sa.String(length=255), nullable=True),
        sa.Column("city", sa.String(length=120), nullable=True),
        sa.Column("state", sa.String(length=50), nullable=True),
        sa.Column("zip", sa.String(length=20), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_volunteers_email"),
    )

    op.create_table(
        "volunteer_shifts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("hours", sa.Numeric(precision=6, scale=2), nullable=False),
        sa.Column("shift_date", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("email", sa.String(length=320), server_default="", nullable=False),
        sa.Column("volunteer_id", sa.Integer(), nullable=True),
        sa.Column("external_shift_id", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.CheckConstraint("hours >= 0", name="ck_volunteer_shifts_hours_non_negative"),
        sa.ForeignKeyConstraint(
            ["volunteer_id"],
            ["volunteers.id"],
            name="fk_volunteer_shifts_volunteer_id_volunteers",
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_volunteer_shifts_volunteer_id", "volunteer_shifts", ["volunteer_id"], unique=False)
    op.create_index("ix_volunteer_shifts_email", "volunteer_shifts", ["email"], unique=False)
    op.create_index("ix_volunteer_shifts_shift_date", "volunteer_shifts", ["shift_date"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_volunteer_shifts_shift_date", table_name="volunteer_shifts")
    op.drop_index("ix_volunteer_shifts_email", table_name="volunteer_shifts")
    op.drop_index("ix_volunteer_shifts_volunteer_id", table_name="volunteer_shifts")
    op.drop_table("volunteer_shifts")
    op.drop_table("volunteers")
