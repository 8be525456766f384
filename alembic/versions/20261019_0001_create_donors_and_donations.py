"""create donors and donations tables

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "donors",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("first_name", sa.String(length=255), nullable=True),
        sa.Column("last_name", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column(
            "external_id",
            sa.String(length=255),
            nullable=True,
            comment="Identifier from the CRM export the donor was imported from",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("last_imported", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_donors_email"),
    )
    op.create_index("ix_donors_external_id", "donors", ["external_id"], unique=False)

    op.create_table(
        "donations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("email", sa.String(length=320), server_default="", nullable=False),
        sa.Column("donor_id", sa.Integer(), nullable=True),
        sa.Column("external_donation_id", sa.String(length=255), nullable=True),
        sa.Column(
            "imported",
            sa.Integer(),
            server_default="0",
            nullable=False,
            comment="1 when the row came from a spreadsheet import",
        ),
        sa.CheckConstraint("amount >= 0", name="ck_donations_amount_non_negative"),
        sa.ForeignKeyConstraint(
            ["donor_id"], ["donors.id"], name="fk_donations_donor_id_donors", ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_donations_donor_id", "donations", ["donor_id"], unique=False)
    op.create_index("ix_donations_email", "donations", ["email"], unique=False)
    op.create_index("ix_donations_external_donation_id", "donations", ["external_donation_id"], unique=False)
    op.create_index("ix_donations_timestamp", "donations", ["timestamp"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_donations_timestamp", table_name="donations")
    op.drop_index("ix_donations_external_donation_id", table_name="donations")
    op.drop_index("ix_donations_email", table_name="donations")
    op.drop_index("ix_donations_donor_id", table_name="donations")
    op.drop_table("donations")
    op.drop_index("ix_donors_external_id", table_name="donors")
    op.drop_table("donors")
