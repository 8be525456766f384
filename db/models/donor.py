"""
db/models/donor.py

Donor model. One row per email address; donations hang off it.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base

if TYPE_CHECKING:
    from db.models.donation import Donation


class Donor(Base):
    """
    A person who has given at least once, keyed by email.

    Rows are created on first import or explicit create and updated on
    re-import. They are never deleted.
    """

    __tablename__ = "donors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    external_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Identifier from the CRM export the donor was imported from",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    last_imported: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # ── Relationships ──────────────────────────────────────────────────────────

    donations: Mapped[list["Donation"]] = relationship(
        "Donation",
        back_populates="donor",
        passive_deletes=True,
    )

    __table_args__ = (Index("ix_donors_external_id", "external_id"),)

    @property
    def full_name(self) -> str | None:
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts) or None

    def __repr__(self) -> str:
        return f"<Donor id={self.id} email={self.email!r}>"
