"""Person entity: uniquely named personnel record."""
from __future__ import annotations

from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from acts.models.base import Base


class Person(Base):
    __tablename__ = "people"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)

    astronaut_detail: Mapped[Optional["AstronautDetail"]] = relationship(
        "AstronautDetail", back_populates="person", uselist=False, cascade="all, delete-orphan"
    )
    astronaut_duties: Mapped[list] = relationship(
        "AstronautDuty", back_populates="person", cascade="all, delete-orphan"
    )
