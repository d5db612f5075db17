"""Request mediator: routes commands and queries to their handlers.

Each request type (a dataclass) has exactly one handler and any number of
pre-processors. Pre-processors run in registration order and raise
``acts.errors.ActsError`` subclasses to reject a request before the handler
sees it. Handlers return a ``BaseResponse`` envelope; command handlers
catch their own failures and roll back.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable

from sqlalchemy.orm import Session

from acts.schemas.common import BaseResponse

logger = logging.getLogger(__name__)

Handler = Callable[[Session, Any], BaseResponse]
PreProcessor = Callable[[Session, Any], None]


class Mediator:
    def __init__(self, db: Session) -> None:
        self.db = db
        self._handlers: dict[type, Handler] = {}
        self._pre_processors: dict[type, list[PreProcessor]] = defaultdict(list)

    def register(self, request_type: type, handler: Handler,
                 pre_processors: list[PreProcessor] | None = None) -> None:
        self._handlers[request_type] = handler
        self._pre_processors[request_type].extend(pre_processors or [])

    def send(self, request: Any) -> BaseResponse:
        request_type = type(request)
        handler = self._handlers.get(request_type)
        if handler is None:
            raise LookupError(f"No handler registered for {request_type.__name__}")
        for pre in self._pre_processors[request_type]:
            pre(self.db, request)
        logger.debug("Dispatching %s to %s", request_type.__name__, handler.__name__)
        return handler(self.db, request)


def build_mediator(db: Session) -> Mediator:
    """Mediator with every person and duty command/query registered."""
    from acts.modules import duties, people

    mediator = Mediator(db)
    people.register(mediator)
    duties.register(mediator)
    return mediator
