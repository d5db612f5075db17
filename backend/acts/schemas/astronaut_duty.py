"""Pydantic schemas for AstronautDuty."""
from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import Field, field_validator

from acts.schemas.common import ApiModel, coerce_date
from acts.schemas.person import PersonAstronaut


class CreateAstronautDutyRequest(ApiModel):
    name: str = Field(..., max_length=100)
    rank: str = Field(..., max_length=50)
    duty_title: str = Field(..., max_length=100)
    duty_start_date: date

    @field_validator("duty_start_date", mode="before")
    @classmethod
    def _date_only(cls, v):
        return coerce_date(v)


class AstronautDutyRead(ApiModel):
    id: int
    person_id: int
    rank: str
    duty_title: str
    duty_start_date: date
    duty_end_date: Optional[date] = None


class AstronautDutiesByName(ApiModel):
    person: PersonAstronaut
    astronaut_duties: list[AstronautDutyRead] = []
