"""Shared fixtures: in-memory database and a controllable clock."""

import datetime as dt

import pytest

from domain.models import ClearMode
from services.session_service import SessionService
from services.stats_service import StatsService
from services.task_service import TaskService
from storage.db import Database


class FakeClock:
    def __init__(self, now: dt.datetime):
        self.now = now

    def __call__(self) -> dt.datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += dt.timedelta(**kwargs)


@pytest.fixture
def db():
    database = Database(db_path=":memory:")
    database.init_schema()
    yield database
    database.close()


@pytest.fixture
def clock():
    return FakeClock(dt.datetime(2026, 2, 11, 9, 0))


@pytest.fixture
def sessions(db, clock):
    return SessionService(db, clock=clock)


@pytest.fixture
def sessions_clear_all(db, clock):
    return SessionService(db, clear_mode=ClearMode.ALL, clock=clock)


@pytest.fixture
def tasks(db):
    return TaskService(db)


@pytest.fixture
def stats(db):
    return StatsService(db)
