"""AstronautDuty entity: one entry of a person's duty history.

At most one duty per person has a null duty_end_date (the current duty).
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import Integer, String, Date, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from acts.models.base import Base


class AstronautDuty(Base):
    __tablename__ = "astronaut_duties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    person_id: Mapped[int] = mapped_column(Integer, ForeignKey("people.id"), nullable=False, index=True)
    rank: Mapped[str] = mapped_column(String(50), nullable=False)
    duty_title: Mapped[str] = mapped_column(String(100), nullable=False)
    duty_start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    duty_end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    person: Mapped["Person"] = relationship("Person", back_populates="astronaut_duties")
