"""
db/models/volunteer_shift.py

One logged volunteer shift. Same orphan rules as donations: resolved to a
volunteer by email when possible, otherwise stored with only the email.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base

if TYPE_CHECKING:
    from db.models.volunteer import Volunteer


class VolunteerShift(Base):
    __tablename__ = "volunteer_shifts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    hours: Mapped[Decimal] = mapped_column(Numeric(6, 2), nullable=False)
    shift_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )
    email: Mapped[str] = mapped_column(String(320), nullable=False, default="", server_default="")
    volunteer_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("volunteers.id", ondelete="SET NULL"),
        nullable=True,
    )
    external_shift_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    volunteer: Mapped["Volunteer | None"] = relationship("Volunteer", back_populates="shifts")

    __table_args__ = (
        CheckConstraint("hours >= 0", name="ck_volunteer_shifts_hours_non_negative"),
        Index("ix_volunteer_shifts_volunteer_id", "volunteer_id"),
        Index("ix_volunteer_shifts_email", "email"),
        Index("ix_volunteer_shifts_shift_date", "shift_date"),
    )

    def __repr__(self) -> str:
        return f"<VolunteerShift id={self.id} hours={self.hours} volunteer_id={self.volunteer_id}>"
