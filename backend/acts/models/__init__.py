"""Import all models to register them with SQLAlchemy metadata."""
from acts.models.base import Base
from acts.models.person import Person
from acts.models.astronaut_detail import AstronautDetail
from acts.models.astronaut_duty import AstronautDuty
from acts.models.log_entry import LogEntry

__all__ = [
    "Base",
    "Person",
    "AstronautDetail",
    "AstronautDuty",
    "LogEntry",
]
