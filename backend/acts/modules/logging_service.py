"""Database-backed logging sink for operation outcomes.

Every API operation records one INFO, ERROR or SUCCESS entry in the
``log_entries`` table. The sink is a side channel: a failure to persist an
entry is rolled back and reported through the standard ``logging`` module,
never raised to the caller.
"""
from __future__ import annotations

import logging
import traceback
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from acts.models.base import LogLevelEnum
from acts.models.log_entry import LogEntry

logger = logging.getLogger(__name__)

_MAX_MESSAGE = 200
_MAX_EXCEPTION = 1000
_MAX_USER_ID = 50
_MAX_REQUEST_ID = 100

_PY_LEVELS = {
    LogLevelEnum.INFO: logging.INFO,
    LogLevelEnum.SUCCESS: logging.INFO,
    LogLevelEnum.ERROR: logging.ERROR,
}


class DatabaseLoggingService:
    def __init__(self, db: Session, user_id: Optional[str] = None,
                 request_id: Optional[str] = None) -> None:
        self.db = db
        self.user_id = user_id
        self.request_id = request_id

    def log_info(self, message: str, source: Optional[str] = None) -> None:
        self._log(LogLevelEnum.INFO, message, source=source)

    def log_error(self, message: str, exception: Optional[BaseException] = None,
                  source: Optional[str] = None) -> None:
        details = None
        if exception is not None:
            details = "".join(traceback.format_exception(type(exception), exception, exception.__traceback__))
        self._log(LogLevelEnum.ERROR, message, exception=details, source=source)

    def log_success(self, message: str, source: Optional[str] = None) -> None:
        self._log(LogLevelEnum.SUCCESS, message, source=source)

    def _log(self, level: LogLevelEnum, message: str, exception: Optional[str] = None,
             source: Optional[str] = None) -> None:
        logger.log(_PY_LEVELS[level], "[%s] %s", source or "-", message)
        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).replace(tzinfo=None),
            level=level.value,
            message=message[:_MAX_MESSAGE],
            exception=exception[:_MAX_EXCEPTION] if exception else None,
            source=source,
            user_id=self.user_id[:_MAX_USER_ID] if self.user_id else None,
            request_id=self.request_id[:_MAX_REQUEST_ID] if self.request_id else None,
        )
        try:
            self.db.add(entry)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning("Could not persist log entry (%s): %s", level.value, e)
