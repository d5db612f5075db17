from __future__ import annotations

import logging
import time
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from acts.config import settings
from acts.database import get_db
from acts.errors import ActsError
from acts.modules.duties import CreateAstronautDuty, GetAstronautDutiesByName
from acts.modules.logging_service import DatabaseLoggingService
from acts.modules.mediator import build_mediator
from acts.modules.people import CreatePerson, GetPeople, GetPersonByName, UpdatePerson
from acts.schemas.astronaut_duty import CreateAstronautDutyRequest
from acts.schemas.common import BaseResponse
from acts.schemas.log_entry import LogEntryRead, RankOption
from acts.schemas.person import UpdatePersonRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _respond(result: BaseResponse) -> JSONResponse:
    return JSONResponse(status_code=result.response_code, content=result.to_content())


def _logging_service(db: Session, request: Request) -> DatabaseLoggingService:
    return DatabaseLoggingService(
        db,
        user_id=request.headers.get("X-User-ID"),
        request_id=request.headers.get("X-Request-ID"),
    )


def _dispatch(db: Session, request: Request, command, source: str,
              success_message: str, failure_message: str) -> JSONResponse:
    """Send a command or query through the mediator and record the outcome.

    Pre-processor rejections keep their response code; anything unexpected
    becomes a 500 envelope. Never raises.
    """
    audit = _logging_service(db, request)
    try:
        result = build_mediator(db).send(command)
    except ActsError as e:
        audit.log_error(f"{failure_message}: {e.message}", e, source)
        return _respond(BaseResponse(success=False, message=e.message, response_code=e.response_code))
    except Exception as e:
        db.rollback()
        logger.exception("%s failed", source)
        audit.log_error(failure_message, e, source)
        return _respond(BaseResponse(success=False, message=str(e), response_code=500))

    if result.success:
        audit.log_success(success_message, source)
    else:
        audit.log_error(f"{failure_message}: {result.message}", source=source)
    return _respond(result)


# ---------------------------------------------------------------------------
# Person
# ---------------------------------------------------------------------------

@router.get("/Person", tags=["person"])
def get_people(request: Request, db: Session = Depends(get_db)):
    """List all people with their current astronaut snapshot."""
    return _dispatch(db, request, GetPeople(), "PersonController.GetPeople",
                     "Successfully retrieved all people", "Failed to retrieve all people")


@router.get("/Person/{name}", tags=["person"])
def get_person_by_name(name: str, request: Request, db: Session = Depends(get_db)):
    """Exact-match lookup. data is null when no such person exists."""
    return _dispatch(db, request, GetPersonByName(name=name), "PersonController.GetPersonByName",
                     f"Successfully retrieved person: {name}", f"Failed to retrieve person: {name}")


@router.post("/Person", tags=["person"])
def create_person(request: Request, name: str = Body(...), db: Session = Depends(get_db)):
    """Create a person. Body is a bare JSON string holding the name."""
    return _dispatch(db, request, CreatePerson(name=name), "PersonController.CreatePerson",
                     f"Successfully created person: {name}", f"Failed to create person: {name}")


@router.put("/Person/{name}", tags=["person"])
def update_person(name: str, request: Request,
                  body: Optional[UpdatePersonRequest] = Body(None),
                  db: Session = Depends(get_db)):
    """Partial update of a person's astronaut snapshot; omitted fields stay unchanged."""
    body = body or UpdatePersonRequest()
    command = UpdatePerson(
        name=name,
        current_rank=body.current_rank,
        current_duty_title=body.current_duty_title,
        career_start_date=body.career_start_date,
        career_end_date=body.career_end_date,
    )
    return _dispatch(db, request, command, "PersonController.UpdatePerson",
                     f"Successfully updated person: {name}", f"Failed to update person: {name}")


# ---------------------------------------------------------------------------
# AstronautDuty
# ---------------------------------------------------------------------------

@router.get("/AstronautDuty/{name}", tags=["astronaut-duty"])
def get_astronaut_duties_by_name(name: str, request: Request, db: Session = Depends(get_db)):
    """Person snapshot plus full duty history, newest start date first."""
    return _dispatch(db, request, GetAstronautDutiesByName(name=name),
                     "AstronautDutyController.GetAstronautDutiesByName",
                     f"Successfully retrieved astronaut duties for: {name}",
                     f"Failed to retrieve astronaut duties for: {name}")


@router.post("/AstronautDuty", tags=["astronaut-duty"])
def create_astronaut_duty(body: CreateAstronautDutyRequest, request: Request,
                          db: Session = Depends(get_db)):
    """Assign a new duty. The open duty, if any, ends the day before the new start date."""
    command = CreateAstronautDuty(
        name=body.name,
        rank=body.rank,
        duty_title=body.duty_title,
        duty_start_date=body.duty_start_date,
    )
    return _dispatch(db, request, command, "AstronautDutyController.CreateAstronautDuty",
                     f"Successfully created astronaut duty for: {body.name}",
                     f"Failed to create astronaut duty for: {body.name}")


# ---------------------------------------------------------------------------
# Reference data, audit log, health
# ---------------------------------------------------------------------------
# Read-only routes; they do not write to the logging sink.

@router.get("/Rank", tags=["reference"])
def list_ranks():
    """Rank options offered by the UI, most junior first."""
    from acts.models.base import RANK_LABELS

    options = [RankOption(value=v, label=f"{v} - {label}") for v, label in RANK_LABELS.items()]
    return _respond(BaseResponse(data=options))


@router.get("/Log", tags=["admin"])
def list_log_entries(
    level: Optional[str] = None,
    source: Optional[str] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
):
    """List persisted log entries, newest first."""
    from acts.models.log_entry import LogEntry

    q = db.query(LogEntry).order_by(LogEntry.timestamp.desc(), LogEntry.id.desc())
    if level:
        q = q.filter(LogEntry.level == level.upper())
    if source:
        q = q.filter(LogEntry.source == source)
    total = q.count()
    entries = q.offset(skip).limit(limit).all()
    return _respond(BaseResponse(data={
        "total": total,
        "logs": [LogEntryRead.model_validate(e) for e in entries],
    }))


@router.get("/health", tags=["system"])
def health_check(db: Session = Depends(get_db)):
    """Health check with DB latency measurement."""
    from sqlalchemy import text

    t0 = time.time()
    try:
        db.execute(text("SELECT 1"))
        db_status = "ok"
    except Exception as e:
        db_status = f"error: {e}"
    latency_ms = round((time.time() - t0) * 1000, 1)

    return {
        "status": "ok",
        "version": settings.VERSION,
        "database": {"status": db_status, "latency_ms": latency_ms},
    }
