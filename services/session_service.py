# services/session_service.py
# -*- coding: utf-8 -*-

import dataclasses
import datetime as dt
import logging
import re
from typing import Callable, Optional

from core.errors import ValidationError
from core.session_machine import SessionMachine
from core.trophy_engine import compute_tier, validate_tier
from domain.models import ClearMode, Session, TrophyHistogram
from storage.db import Database
from storage.repos import SessionRepo, TaskRepo, TrophyRepo

logger = logging.getLogger(__name__)

COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")


def _now() -> dt.datetime:
    return dt.datetime.now().astimezone()


class SessionService:
    """
    Orchestrates:
    - SessionMachine transitions
    - SQLite load/save of the singleton session
    - Trophy recording on finish (exactly once per finish)
    - Task clean-up on reset
    """

    def __init__(
        self,
        db: Database,
        clear_mode: ClearMode = ClearMode.COMPLETED_ONLY,
        clock: Callable[[], dt.datetime] = _now,
        strict: bool = False,
    ):
        self.db = db
        self.sessions = SessionRepo(db)
        self.tasks = TaskRepo(db)
        self.trophies = TrophyRepo(db)
        self.clear_mode = ClearMode(clear_mode)
        self.clock = clock
        self.strict = strict

    def _machine(self) -> SessionMachine:
        return SessionMachine(self.sessions.load(), strict=self.strict)

    # ---- session ----
    def get_session(self) -> Session:
        return self.sessions.load()

    def start_session(self) -> Session:
        with self.db.transaction():
            machine = self._machine()
            if machine.start(self.clock(), self.tasks.count()):
                self.sessions.save(machine.snapshot())
                logger.info("session started at %s", machine.snapshot().start_time)
            return machine.snapshot()

    def complete_session(self) -> Session:
        with self.db.transaction():
            machine = self._machine()
            if not machine.complete(self.clock(), self.tasks.count_completed()):
                return machine.snapshot()

            session = self.sessions.save(machine.snapshot())
            # same transaction as the status change: a repeated finish is a no-op
            self.trophies.increment(session.trophy_tier)
            logger.info(
                "session finished, tier %d recorded (%s -> %s)",
                session.trophy_tier,
                session.start_time,
                session.end_time,
            )
            return session

    def reset_session(self) -> Session:
        with self.db.transaction():
            machine = self._machine()
            machine.reset()
            session = self.sessions.save(machine.snapshot())
            if self.clear_mode == ClearMode.ALL:
                removed = self.tasks.delete_all()
            else:
                removed = self.tasks.delete_completed()
            logger.info(
                "session reset, %d task(s) removed (%s)", removed, self.clear_mode.value
            )
            return session

    def update_session(
        self,
        title: Optional[str] = None,
        paper_color: Optional[str] = None,
        background_color: Optional[str] = None,
    ) -> Session:
        changes = {}
        if title is not None:
            title = title.strip()
            if not title:
                raise ValidationError("Title cannot be empty.")
            changes["title"] = title
        for name, value in (
            ("paper_color", paper_color),
            ("background_color", background_color),
        ):
            if value is None:
                continue
            if not COLOR_RE.match(value):
                raise ValidationError(f"Invalid colour {value!r}. Use #rgb or #rrggbb.")
            changes[name] = value.lower()

        with self.db.transaction():
            session = dataclasses.replace(self.sessions.load(), **changes)
            return self.sessions.save(session)

    # ---- trophies ----
    def compute_tier(self, start: dt.datetime, end: dt.datetime) -> int:
        return compute_tier(start, end)

    def record_trophy(self, tier: int) -> TrophyHistogram:
        tier = validate_tier(tier)
        hist = self.trophies.increment(tier)
        logger.info("trophy tier %d recorded", tier)
        return hist

    def get_trophy_histogram(self) -> TrophyHistogram:
        return self.trophies.get()
