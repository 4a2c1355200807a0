# -*- coding: utf-8 -*-

from typing import Any, Dict, Optional

from core.trophy_engine import format_duration, tier_title
from storage.db import Database
from storage.repos import SessionRepo, TaskRepo, TrophyRepo


class StatsService:
    def __init__(self, db: Database):
        self.db = db
        self.sessions = SessionRepo(db)
        self.tasks = TaskRepo(db)
        self.trophies = TrophyRepo(db)

    def trophy_summary(self) -> Dict[str, Any]:
        hist = self.trophies.get()
        earned = [t for t, c in sorted(hist.counts.items()) if c > 0]
        best = earned[0] if earned else None
        return {
            "counts": dict(hist.counts),
            "total": hist.total,
            "best_tier": best,
            "best_title": tier_title(best) if best else None,
        }

    def reward_summary(self) -> Optional[Dict[str, Any]]:
        """Reward for the finished session, or None while not finished."""
        s = self.sessions.load()
        if not s.is_finished or s.start_time is None or s.end_time is None:
            return None

        elapsed = (s.end_time - s.start_time).total_seconds()
        return {
            "tier": s.trophy_tier,
            "title": tier_title(s.trophy_tier),
            "elapsed_sec": int(elapsed),
            "duration": format_duration(elapsed),
            "completed_count": self.tasks.count_completed(),
        }
