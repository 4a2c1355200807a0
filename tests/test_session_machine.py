"""Unit tests for the session lifecycle engine - no storage."""

import datetime as dt

import pytest

from core.errors import InvalidTransition
from core.session_machine import SessionMachine, can_check_tasks
from domain.models import Session, SessionStatus

T0 = dt.datetime(2026, 2, 11, 9, 0)


def running_machine(**kwargs) -> SessionMachine:
    m = SessionMachine(**kwargs)
    assert m.start(T0, task_count=2)
    return m


class TestStart:
    def test_initial_state_is_planning(self):
        s = SessionMachine().snapshot()
        assert s.status == SessionStatus.PLANNING
        assert s.start_time is None

    def test_start_sets_running_and_start_time(self):
        m = running_machine()
        s = m.snapshot()
        assert s.status == SessionStatus.RUNNING
        assert s.start_time == T0

    def test_start_without_tasks_is_noop(self):
        m = SessionMachine()
        assert m.start(T0, task_count=0) is False
        assert m.snapshot().status == SessionStatus.PLANNING
        assert m.snapshot().start_time is None

    def test_start_while_running_is_noop(self):
        m = running_machine()
        later = T0 + dt.timedelta(hours=1)
        assert m.start(later, task_count=2) is False
        assert m.snapshot().start_time == T0

    def test_start_from_finished_begins_new_run(self):
        m = running_machine()
        m.complete(T0 + dt.timedelta(hours=1), completed_count=1)
        later = T0 + dt.timedelta(hours=2)
        assert m.start(later, task_count=1)
        s = m.snapshot()
        assert s.status == SessionStatus.RUNNING
        assert s.start_time == later
        assert s.end_time is None
        assert s.trophy_tier is None

    def test_strict_start_raises(self):
        with pytest.raises(InvalidTransition):
            SessionMachine(strict=True).start(T0, task_count=0)


class TestComplete:
    def test_complete_keeps_start_and_sets_tier(self):
        m = running_machine()
        end = T0 + dt.timedelta(hours=2)
        assert m.complete(end, completed_count=1)
        s = m.snapshot()
        assert s.status == SessionStatus.FINISHED
        assert s.start_time == T0
        assert s.end_time == end
        assert s.trophy_tier == 1

    def test_complete_same_day_long_session(self):
        m = running_machine()
        m.complete(T0 + dt.timedelta(hours=10), completed_count=1)
        assert m.snapshot().trophy_tier == 2

    def test_complete_without_completed_tasks_is_noop(self):
        m = running_machine()
        assert m.complete(T0 + dt.timedelta(hours=1), completed_count=0) is False
        assert m.snapshot().status == SessionStatus.RUNNING

    def test_complete_from_planning_is_noop(self):
        m = SessionMachine()
        assert m.complete(T0, completed_count=3) is False
        assert m.snapshot().status == SessionStatus.PLANNING

    def test_complete_twice_is_noop(self):
        m = running_machine()
        first_end = T0 + dt.timedelta(hours=1)
        m.complete(first_end, completed_count=1)
        assert m.complete(T0 + dt.timedelta(hours=9), completed_count=1) is False
        assert m.snapshot().end_time == first_end

    def test_strict_complete_raises(self):
        m = running_machine(strict=True)
        with pytest.raises(InvalidTransition):
            m.complete(T0, completed_count=0)


class TestReset:
    @pytest.mark.parametrize("steps", ["planning", "running", "finished"])
    def test_reset_from_any_state(self, steps):
        m = SessionMachine()
        if steps in ("running", "finished"):
            m.start(T0, task_count=1)
        if steps == "finished":
            m.complete(T0 + dt.timedelta(hours=1), completed_count=1)

        m.reset()
        s = m.snapshot()
        assert s.status == SessionStatus.PLANNING
        assert s.start_time is None
        assert s.end_time is None
        assert s.trophy_tier is None

    def test_reset_keeps_cosmetics(self):
        m = SessionMachine(Session(title="Errands", paper_color="#ffffff"))
        m.start(T0, task_count=1)
        m.reset()
        assert m.snapshot().title == "Errands"
        assert m.snapshot().paper_color == "#ffffff"


class TestCanCheckTasks:
    def test_only_while_running(self):
        assert can_check_tasks(Session(status=SessionStatus.RUNNING))
        assert not can_check_tasks(Session(status=SessionStatus.PLANNING))
        assert not can_check_tasks(Session(status=SessionStatus.FINISHED))


class TestClockSkew:
    def test_end_before_start_finishes_at_start(self):
        m = running_machine()
        assert m.complete(T0 - dt.timedelta(minutes=40), completed_count=1)
        s = m.snapshot()
        assert s.end_time == T0
        assert s.trophy_tier == 1
