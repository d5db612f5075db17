"""AstronautDetail entity: a person's current astronaut snapshot."""
from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import Integer, String, Date, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from acts.models.base import Base


class AstronautDetail(Base):
    __tablename__ = "astronaut_details"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    person_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("people.id"), unique=True, nullable=False, index=True
    )
    current_rank: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    current_duty_title: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    career_start_date: Mapped[date] = mapped_column(Date, nullable=False)
    career_end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    person: Mapped["Person"] = relationship("Person", back_populates="astronaut_detail")
