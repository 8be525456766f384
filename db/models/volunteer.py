"""
db/models/volunteer.py

Volunteer model, keyed by email like donors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from db.models.volunteer_shift import VolunteerShift


class Volunteer(Base, TimestampMixin):
    __tablename__ = "volunteers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str | None] = mapped_column(String(120), nullable=True)
    state: Mapped[str | None] = mapped_column(String(50), nullable=True)
    zip_code: Mapped[str | None] = mapped_column("zip", String(20), nullable=True)

    shifts: Mapped[list["VolunteerShift"]] = relationship(
        "VolunteerShift",
        back_populates="volunteer",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Volunteer id={self.id} email={self.email!r}>"
