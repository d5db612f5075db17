"""Shared declarative base, enums and constants for all models."""
from __future__ import annotations

import enum
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class LogLevelEnum(str, enum.Enum):
    INFO = "INFO"
    ERROR = "ERROR"
    SUCCESS = "SUCCESS"


# Terminal duty title: sets the career end date and accepts no successor duty.
RETIRED_DUTY_TITLE = "RETIRED"

# Rank value -> display label, in order of seniority.
RANK_LABELS: dict[str, str] = {
    "2LT": "Second Lieutenant",
    "1LT": "First Lieutenant",
    "CPT": "Captain",
    "MAJ": "Major",
    "LTC": "Lieutenant Colonel",
    "COL": "Colonel",
    "Brig Gen": "Brigadier General",
    "Maj Gen": "Major General",
    "Lt Gen": "Lieutenant General",
    "Gen": "General",
}
