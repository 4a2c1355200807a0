# -*- coding: utf-8 -*-

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

TIERS = range(1, 9)

DEFAULT_TITLE = "My To-Do List"
DEFAULT_PAPER_COLOR = "#fefcf5"
DEFAULT_BACKGROUND_COLOR = "#f1f5f9"


class SessionStatus(str, Enum):
    PLANNING = "planning"
    RUNNING = "running"
    FINISHED = "finished"


class ClearMode(str, Enum):
    """Which tasks a reset removes."""

    COMPLETED_ONLY = "completed-only"
    ALL = "all"


@dataclass(frozen=True)
class Task:
    id: int
    content: str
    completed: bool
    order: int


@dataclass(frozen=True)
class Session:
    status: SessionStatus = SessionStatus.PLANNING
    start_time: Optional[dt.datetime] = None
    end_time: Optional[dt.datetime] = None
    trophy_tier: Optional[int] = None  # 1..8, set on finish
    title: str = DEFAULT_TITLE
    paper_color: str = DEFAULT_PAPER_COLOR
    background_color: str = DEFAULT_BACKGROUND_COLOR

    @property
    def is_running(self) -> bool:
        return self.status == SessionStatus.RUNNING

    @property
    def is_finished(self) -> bool:
        return self.status == SessionStatus.FINISHED


@dataclass(frozen=True)
class TrophyHistogram:
    counts: Dict[int, int] = field(default_factory=lambda: {t: 0 for t in TIERS})

    def count(self, tier: int) -> int:
        return self.counts.get(tier, 0)

    @property
    def total(self) -> int:
        return sum(self.counts.values())
