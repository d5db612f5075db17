"""Duty history ledger and the duty transition rule engine.

Assigning a new duty keeps the ledger and the person's astronaut snapshot
consistent in one transaction:

  * the snapshot's current rank and duty title follow the new duty;
  * the first assignment opens the career (career start = duty start);
  * a RETIRED duty sets the career end date to its start date;
  * the previously open duty, if any, ends the day before the new one starts;
  * the new duty is stored with no end date.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from acts.config import settings
from acts.errors import ConflictError, NotFoundError
from acts.models.astronaut_detail import AstronautDetail
from acts.models.astronaut_duty import AstronautDuty
from acts.models.base import RETIRED_DUTY_TITLE
from acts.models.person import Person
from acts.modules.people import find_person, project_person
from acts.schemas.astronaut_duty import AstronautDutiesByName, AstronautDutyRead
from acts.schemas.common import BaseResponse

logger = logging.getLogger(__name__)


@dataclass
class CreateAstronautDuty:
    name: str
    rank: str
    duty_title: str
    duty_start_date: date


@dataclass
class GetAstronautDutiesByName:
    name: str


def _failure(message: str, response_code: int) -> BaseResponse:
    return BaseResponse(success=False, message=message, response_code=response_code)


def current_duty(db: Session, person_id: int) -> Optional[AstronautDuty]:
    """The person's open duty (null end date), latest start first if the ledger is inconsistent."""
    return (
        db.query(AstronautDuty)
        .filter(AstronautDuty.person_id == person_id, AstronautDuty.duty_end_date.is_(None))
        .order_by(AstronautDuty.duty_start_date.desc())
        .first()
    )


# ---------------------------------------------------------------------------
# CreateAstronautDuty
# ---------------------------------------------------------------------------

def verify_duty_assignment(db: Session, request: CreateAstronautDuty) -> None:
    if db.query(Person.id).filter(Person.name == request.name).first() is None:
        raise NotFoundError("Person not found")

    duplicate = (
        db.query(AstronautDuty.id)
        .filter(
            AstronautDuty.duty_title == request.duty_title,
            AstronautDuty.duty_start_date == request.duty_start_date,
        )
        .first()
    )
    if duplicate is not None:
        raise ConflictError(
            f"A {request.duty_title} duty starting {request.duty_start_date.isoformat()} already exists"
        )


def handle_create_astronaut_duty(db: Session, request: CreateAstronautDuty) -> BaseResponse:
    try:
        if not (request.name or "").strip():
            return _failure("Name is required", 400)
        if not (request.rank or "").strip():
            return _failure("Rank is required", 400)
        if not (request.duty_title or "").strip():
            return _failure("Duty Title is required", 400)
        start = request.duty_start_date
        if start > date.today():
            return _failure("Duty Start Date cannot be in the future", 400)

        person = find_person(db, request.name)
        if person is None:
            return _failure("Person not found", 404)

        previous = current_duty(db, person.id)
        if previous is not None:
            if settings.REJECT_ACTIVE_DUTY_ASSIGNMENT:
                return _failure("Person already has an active duty assignment", 400)
            if previous.duty_title == RETIRED_DUTY_TITLE:
                return _failure("Person is retired", 400)
            if start <= previous.duty_start_date:
                return _failure("Duty Start Date must be after the current duty start date", 400)

        detail = person.astronaut_detail
        if detail is None:
            detail = AstronautDetail(person_id=person.id, career_start_date=start)
            db.add(detail)
        detail.current_rank = request.rank
        detail.current_duty_title = request.duty_title
        if request.duty_title == RETIRED_DUTY_TITLE:
            detail.career_end_date = start

        if previous is not None:
            previous.duty_end_date = start - timedelta(days=1)

        duty = AstronautDuty(
            person_id=person.id,
            rank=request.rank,
            duty_title=request.duty_title,
            duty_start_date=start,
            duty_end_date=None,
        )
        db.add(duty)
        db.commit()
        logger.info("Assigned %s/%s to %s from %s", request.rank, request.duty_title,
                    person.name, start.isoformat())
        return BaseResponse(message="Astronaut duty created successfully", data={"id": duty.id})
    except Exception as e:
        db.rollback()
        logger.exception("CreateAstronautDuty failed for %r", request.name)
        return _failure(f"An error occurred: {e}", 500)


# ---------------------------------------------------------------------------
# GetAstronautDutiesByName
# ---------------------------------------------------------------------------

def handle_get_astronaut_duties_by_name(db: Session, request: GetAstronautDutiesByName) -> BaseResponse:
    person = find_person(db, request.name)
    if person is None:
        return _failure("Person not found", 404)

    duties = (
        db.query(AstronautDuty)
        .filter(AstronautDuty.person_id == person.id)
        .order_by(AstronautDuty.duty_start_date.desc(), AstronautDuty.id.desc())
        .all()
    )
    return BaseResponse(data=AstronautDutiesByName(
        person=project_person(person),
        astronaut_duties=[AstronautDutyRead.model_validate(d) for d in duties],
    ))


def register(mediator) -> None:
    mediator.register(CreateAstronautDuty, handle_create_astronaut_duty, [verify_duty_assignment])
    mediator.register(GetAstronautDutiesByName, handle_get_astronaut_duties_by_name)
