"""Shared pydantic base for the camelCase wire format and the response envelope."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class BaseResponse(ApiModel):
    """Envelope wrapping every business response. HTTP status == response_code."""
    success: bool = True
    message: str = "Successful"
    response_code: int = 200
    data: Optional[Any] = None

    def to_content(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def coerce_date(value):
    """Reduce datetimes (and ISO datetime strings from the UI) to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and len(value) > 10:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    if value == "":
        return None
    return value
