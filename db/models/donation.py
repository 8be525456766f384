"""
db/models/donation.py

Donation model. A donation either points at a donor or is orphaned with
only the email string it was recorded under.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base

if TYPE_CHECKING:
    from db.models.donor import Donor


class Donation(Base):
    __tablename__ = "donations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )
    email: Mapped[str] = mapped_column(String(320), nullable=False, default="", server_default="")
    donor_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("donors.id", ondelete="SET NULL"),
        nullable=True,
    )
    external_donation_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    imported: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
        comment="1 when the row came from a spreadsheet import",
    )

    donor: Mapped["Donor | None"] = relationship("Donor", back_populates="donations")

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_donations_amount_non_negative"),
        Index("ix_donations_donor_id", "donor_id"),
        Index("ix_donations_email", "email"),
        Index("ix_donations_external_donation_id", "external_donation_id"),
        Index("ix_donations_timestamp", "timestamp"),
    )

    @property
    def is_orphaned(self) -> bool:
        return self.donor_id is None

    def __repr__(self) -> str:
        return f"<Donation id={self.id} amount={self.amount} donor_id={self.donor_id}>"
