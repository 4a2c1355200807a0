# -*- coding: utf-8 -*-

import dataclasses
import datetime as dt
import logging
from typing import Optional

from core.errors import InvalidTransition
from core.trophy_engine import compute_tier
from domain.models import Session, SessionStatus

logger = logging.getLogger(__name__)


class SessionMachine:
    """
    Pure lifecycle engine (no storage).
    planning -> running -> finished -> (reset) -> planning

    start()/complete() return True when a transition happened. Unmet
    preconditions are no-ops unless strict=True, which raises
    InvalidTransition instead.
    """

    def __init__(self, session: Optional[Session] = None, strict: bool = False):
        self.session = session or Session()
        self.strict = strict

    def snapshot(self) -> Session:
        return self.session

    def _reject(self, msg: str) -> bool:
        if self.strict:
            raise InvalidTransition(msg)
        logger.debug("transition ignored: %s", msg)
        return False

    def start(self, now: dt.datetime, task_count: int) -> bool:
        if self.session.status not in (SessionStatus.PLANNING, SessionStatus.FINISHED):
            return self._reject(f"cannot start while {self.session.status.value}")
        if task_count < 1:
            return self._reject("cannot start without tasks")

        self.session = dataclasses.replace(
            self.session,
            status=SessionStatus.RUNNING,
            start_time=now,
            end_time=None,
            trophy_tier=None,
        )
        return True

    def complete(self, now: dt.datetime, completed_count: int) -> bool:
        if self.session.status != SessionStatus.RUNNING:
            return self._reject(f"cannot complete while {self.session.status.value}")
        if completed_count < 1:
            return self._reject("cannot complete without a completed task")

        start = self.session.start_time or now
        # naive values are local wall-clock time
        if start.tzinfo is None and now.tzinfo is not None:
            start = start.astimezone()
        elif now.tzinfo is None and start.tzinfo is not None:
            now = now.astimezone()
        if now < start:
            logger.warning(
                "clock moved backwards (%s < %s), finishing at start", now, start
            )
            now = start

        self.session = dataclasses.replace(
            self.session,
            status=SessionStatus.FINISHED,
            start_time=start,
            end_time=now,
            trophy_tier=compute_tier(start, now),
        )
        return True

    def reset(self) -> None:
        # allowed from any state; cosmetic fields survive
        self.session = dataclasses.replace(
            self.session,
            status=SessionStatus.PLANNING,
            start_time=None,
            end_time=None,
            trophy_tier=None,
        )


def can_check_tasks(session: Session) -> bool:
    """Tasks may only be checked or unchecked while the session runs."""
    return session.status == SessionStatus.RUNNING
