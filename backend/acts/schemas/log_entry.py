"""Pydantic schemas for log entries and rank options."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from acts.schemas.common import ApiModel


class LogEntryRead(ApiModel):
    id: int
    timestamp: datetime
    level: str
    message: str
    exception: Optional[str] = None
    source: Optional[str] = None
    user_id: Optional[str] = None
    request_id: Optional[str] = None


class RankOption(ApiModel):
    value: str
    label: str
