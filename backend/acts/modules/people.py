"""Person registry: create/update commands and the person queries."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from acts.errors import ConflictError, NotFoundError
from acts.models.astronaut_detail import AstronautDetail
from acts.models.person import Person
from acts.schemas.common import BaseResponse
from acts.schemas.person import PersonAstronaut

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 100


@dataclass
class CreatePerson:
    name: str


@dataclass
class UpdatePerson:
    name: str
    current_rank: Optional[str] = None
    current_duty_title: Optional[str] = None
    career_start_date: Optional[date] = None
    career_end_date: Optional[date] = None


@dataclass
class GetPeople:
    pass


@dataclass
class GetPersonByName:
    name: str


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _failure(message: str, response_code: int) -> BaseResponse:
    return BaseResponse(success=False, message=message, response_code=response_code)


def project_person(person: Person) -> PersonAstronaut:
    """Flatten a person and its astronaut detail into the API projection."""
    detail = person.astronaut_detail
    return PersonAstronaut(
        person_id=person.id,
        name=person.name,
        current_rank=detail.current_rank if detail else None,
        current_duty_title=detail.current_duty_title if detail else None,
        career_start_date=detail.career_start_date if detail else None,
        career_end_date=detail.career_end_date if detail else None,
    )


def find_person(db: Session, name: str) -> Optional[Person]:
    """Exact, case-sensitive lookup by name."""
    return (
        db.query(Person)
        .options(joinedload(Person.astronaut_detail))
        .filter(Person.name == name)
        .first()
    )


# ---------------------------------------------------------------------------
# CreatePerson
# ---------------------------------------------------------------------------

def verify_name_is_free(db: Session, request: CreatePerson) -> None:
    name = (request.name or "").strip()
    if name and db.query(Person.id).filter(Person.name == name).first() is not None:
        raise ConflictError(f"Person '{name}' already exists")


def handle_create_person(db: Session, request: CreatePerson) -> BaseResponse:
    try:
        if _blank(request.name):
            return _failure("Name is required", 400)
        name = request.name.strip()
        if len(name) > MAX_NAME_LENGTH:
            return _failure(f"Name cannot exceed {MAX_NAME_LENGTH} characters", 400)

        person = Person(name=name)
        db.add(person)
        db.commit()
        return BaseResponse(message="Person created successfully", data={"id": person.id})
    except IntegrityError:
        db.rollback()
        return _failure(f"Person '{request.name.strip()}' already exists", 400)
    except Exception as e:
        db.rollback()
        logger.exception("CreatePerson failed for %r", request.name)
        return _failure(f"An error occurred: {e}", 500)


# ---------------------------------------------------------------------------
# UpdatePerson
# ---------------------------------------------------------------------------

def verify_person_exists(db: Session, request) -> None:
    if db.query(Person.id).filter(Person.name == request.name).first() is None:
        raise NotFoundError("Person not found")


def handle_update_person(db: Session, request: UpdatePerson) -> BaseResponse:
    """Partial update of the astronaut snapshot: absent or blank fields are left untouched."""
    try:
        if _blank(request.name):
            return _failure("Name is required", 400)
        if (request.career_start_date and request.career_end_date
                and request.career_start_date > request.career_end_date):
            return _failure("Career start date cannot be after career end date", 400)
        if request.career_start_date and request.career_start_date > date.today():
            return _failure("Career start date cannot be in the future", 400)

        person = find_person(db, request.name)
        if person is None:
            return _failure("Person not found", 404)

        detail = person.astronaut_detail
        if detail is not None:
            if not _blank(request.current_rank):
                detail.current_rank = request.current_rank.strip()
            if not _blank(request.current_duty_title):
                detail.current_duty_title = request.current_duty_title.strip()
            if request.career_start_date is not None:
                detail.career_start_date = request.career_start_date
            if request.career_end_date is not None:
                detail.career_end_date = request.career_end_date
        elif (not _blank(request.current_rank) or not _blank(request.current_duty_title)
              or request.career_start_date is not None or request.career_end_date is not None):
            db.add(AstronautDetail(
                person_id=person.id,
                current_rank=(request.current_rank or "").strip(),
                current_duty_title=(request.current_duty_title or "").strip(),
                career_start_date=request.career_start_date or date.today(),
                career_end_date=request.career_end_date,
            ))

        db.commit()
        return BaseResponse(message="Person updated successfully", data={"id": person.id})
    except Exception as e:
        db.rollback()
        logger.exception("UpdatePerson failed for %r", request.name)
        return _failure(f"An error occurred: {e}", 500)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def handle_get_people(db: Session, request: GetPeople) -> BaseResponse:
    people = (
        db.query(Person)
        .options(joinedload(Person.astronaut_detail))
        .order_by(Person.id)
        .all()
    )
    return BaseResponse(data=[project_person(p) for p in people])


def handle_get_person_by_name(db: Session, request: GetPersonByName) -> BaseResponse:
    person = find_person(db, request.name)
    return BaseResponse(data=project_person(person) if person else None)


def register(mediator) -> None:
    mediator.register(CreatePerson, handle_create_person, [verify_name_is_free])
    mediator.register(UpdatePerson, handle_update_person, [verify_person_exists])
    mediator.register(GetPeople, handle_get_people)
    mediator.register(GetPersonByName, handle_get_person_by_name)
