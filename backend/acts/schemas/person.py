"""Pydantic schemas for Person: request bodies and the PersonAstronaut projection."""
from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import field_validator

from acts.schemas.common import ApiModel, coerce_date


class PersonAstronaut(ApiModel):
    person_id: int
    name: str
    current_rank: Optional[str] = None
    current_duty_title: Optional[str] = None
    career_start_date: Optional[date] = None
    career_end_date: Optional[date] = None


class UpdatePersonRequest(ApiModel):
    current_rank: Optional[str] = None
    current_duty_title: Optional[str] = None
    career_start_date: Optional[date] = None
    career_end_date: Optional[date] = None

    @field_validator("career_start_date", "career_end_date", mode="before")
    @classmethod
    def _date_only(cls, v):
        return coerce_date(v)
