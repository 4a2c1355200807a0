# storage/repos.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import datetime as dt
from typing import Iterable, List, Optional

from domain.models import Session, SessionStatus, Task, TIERS, TrophyHistogram
from storage.db import Database


def _ts_to_text(value: Optional[dt.datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _text_to_ts(value: Optional[str]) -> Optional[dt.datetime]:
    return dt.datetime.fromisoformat(value) if value else None


class SessionRepo:
    """Load/save boundary for the singleton session row (id = 1)."""

    def __init__(self, db: Database):
        self.db = db

    def load(self) -> Session:
        self.db.conn.execute("INSERT OR IGNORE INTO app_state(id) VALUES (1)")
        self.db.commit()
        r = self.db.conn.execute(
            """
            SELECT status, start_time, end_time, trophy_tier,
                   title, paper_color, background_color
            FROM app_state WHERE id = 1
            """
        ).fetchone()
        return Session(
            status=SessionStatus(r["status"]),
            start_time=_text_to_ts(r["start_time"]),
            end_time=_text_to_ts(r["end_time"]),
            trophy_tier=r["trophy_tier"],
            title=r["title"],
            paper_color=r["paper_color"],
            background_color=r["background_color"],
        )

    def save(self, session: Session) -> Session:
        # single upsert; no fetch-then-update-by-id
        self.db.conn.execute(
            """
            INSERT INTO app_state(
                id, status, start_time, end_time, trophy_tier,
                title, paper_color, background_color
            )
            VALUES(1, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                status=excluded.status,
                start_time=excluded.start_time,
                end_time=excluded.end_time,
                trophy_tier=excluded.trophy_tier,
                title=excluded.title,
                paper_color=excluded.paper_color,
                background_color=excluded.background_color
            """,
            (
                session.status.value,
                _ts_to_text(session.start_time),
                _ts_to_text(session.end_time),
                session.trophy_tier,
                session.title,
                session.paper_color,
                session.background_color,
            ),
        )
        self.db.commit()
        return session


class TaskRepo:
    def __init__(self, db: Database):
        self.db = db

    @staticmethod
    def _row_to_task(r) -> Task:
        return Task(
            id=r["id"],
            content=r["content"],
            completed=bool(r["completed"]),
            order=r["sort_order"],
        )

    def create(self, content: str, completed: bool = False) -> Task:
        cur = self.db.conn.execute(
            """
            INSERT INTO tasks(content, completed, sort_order)
            VALUES(?, ?, (SELECT COALESCE(MAX(sort_order) + 1, 0) FROM tasks))
            """,
            (content, int(completed)),
        )
        self.db.commit()
        return self.get(cur.lastrowid)

    def list(self) -> List[Task]:
        rows = self.db.conn.execute(
            """
            SELECT id, content, completed, sort_order
            FROM tasks ORDER BY sort_order ASC, id ASC
            """
        ).fetchall()
        return [self._row_to_task(r) for r in rows]

    def get(self, task_id: int) -> Optional[Task]:
        r = self.db.conn.execute(
            "SELECT id, content, completed, sort_order FROM tasks WHERE id=?",
            (task_id,),
        ).fetchone()
        return self._row_to_task(r) if r else None

    def set_content(self, task_id: int, content: str) -> None:
        self.db.conn.execute(
            "UPDATE tasks SET content=? WHERE id=?",
            (content, task_id),
        )
        self.db.commit()

    def set_completed(self, task_id: int, completed: bool) -> None:
        self.db.conn.execute(
            "UPDATE tasks SET completed=? WHERE id=?",
            (int(completed), task_id),
        )
        self.db.commit()

    def set_orders(self, ids: Iterable[int]) -> None:
        self.db.conn.executemany(
            "UPDATE tasks SET sort_order=? WHERE id=?",
            [(i, task_id) for i, task_id in enumerate(ids)],
        )
        self.db.commit()

    def delete_task(self, task_id: int) -> None:
        self.db.conn.execute("DELETE FROM tasks WHERE id=?", (task_id,))
        self.db.commit()

    def delete_completed(self) -> int:
        cur = self.db.conn.execute("DELETE FROM tasks WHERE completed=1")
        self.db.commit()
        return cur.rowcount

    def delete_all(self) -> int:
        cur = self.db.conn.execute("DELETE FROM tasks")
        self.db.commit()
        return cur.rowcount

    def count(self) -> int:
        r = self.db.conn.execute("SELECT COUNT(1) AS c FROM tasks").fetchone()
        return int(r["c"])

    def count_completed(self) -> int:
        r = self.db.conn.execute(
            "SELECT COUNT(1) AS c FROM tasks WHERE completed=1"
        ).fetchone()
        return int(r["c"])


class TrophyRepo:
    """Singleton histogram row (id = 1), eight tier columns."""

    def __init__(self, db: Database):
        self.db = db

    def get(self) -> TrophyHistogram:
        self.db.conn.execute("INSERT OR IGNORE INTO trophy_counts(id) VALUES (1)")
        self.db.commit()
        r = self.db.conn.execute(
            "SELECT * FROM trophy_counts WHERE id = 1"
        ).fetchone()
        return TrophyHistogram(counts={t: int(r[f"tier{t}"]) for t in TIERS})

    def increment(self, tier: int) -> TrophyHistogram:
        if tier not in TIERS:
            raise ValueError(f"Unknown tier {tier!r}.")
        col = f"tier{tier}"
        self.db.conn.execute(
            f"""
            INSERT INTO trophy_counts(id, {col}) VALUES (1, 1)
            ON CONFLICT(id) DO UPDATE SET {col} = {col} + 1
            """
        )
        self.db.commit()
        return self.get()
