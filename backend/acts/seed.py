"""Seed people and duty history from a YAML file.

Every record goes through the mediator, so seeded duties obey the same
transition rules as API requests. People that already exist are skipped
along with their duties.

Usage:
    from acts.database import SessionLocal
    from acts.seed import load_seed_file, seed_people
    db = SessionLocal()
    seed_people(db, load_seed_file(Path("config/seed.yaml")))
"""
from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

import yaml
from sqlalchemy.orm import Session

from acts.errors import ActsError
from acts.models.person import Person
from acts.modules.duties import CreateAstronautDuty
from acts.modules.mediator import build_mediator
from acts.modules.people import CreatePerson

logger = logging.getLogger(__name__)


def resolve_seed_path(path: str) -> Path | None:
    """Look for the seed file relative to the working directory, then the repo root."""
    candidate = Path(path)
    if candidate.exists():
        return candidate
    repo_root = Path(__file__).resolve().parents[2]
    candidate = repo_root / path
    if candidate.exists():
        return candidate
    return None


def load_seed_file(path: Path) -> list[dict]:
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    people = data.get("people", [])
    if not isinstance(people, list):
        raise ValueError(f"{path}: 'people' must be a list")
    return people


def _send(mediator, request) -> str | None:
    """Dispatch a request; return the failure message, or None on success."""
    try:
        result = mediator.send(request)
    except ActsError as e:
        return e.message
    return None if result.success else result.message


def seed_people(db: Session, people: list[dict]) -> dict:
    """Create each person and assign their duties. Returns counts and any rejected records."""
    mediator = build_mediator(db)
    created = skipped = duties = 0
    errors: list[str] = []

    for entry in people:
        name = str(entry.get("name", "")).strip()
        if db.query(Person.id).filter(Person.name == name).first() is not None:
            skipped += 1
            continue

        message = _send(mediator, CreatePerson(name=name))
        if message:
            errors.append(f"{name or '<blank>'}: {message}")
            continue
        created += 1

        for duty in entry.get("duties") or []:
            start = duty.get("duty_start_date")
            if not isinstance(start, date):
                try:
                    start = date.fromisoformat(str(start))
                except ValueError:
                    errors.append(f"{name}: invalid duty_start_date {start!r}")
                    continue
            message = _send(mediator, CreateAstronautDuty(
                name=name,
                rank=str(duty.get("rank", "")),
                duty_title=str(duty.get("duty_title", "")),
                duty_start_date=start,
            ))
            if message:
                errors.append(f"{name}: {message}")
            else:
                duties += 1

    logger.info("Seeded %d people (%d skipped), %d duties, %d errors",
                created, skipped, duties, len(errors))
    return {"created": created, "skipped": skipped, "duties": duties, "errors": errors}
