#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import logging
import sqlite3
from contextlib import contextmanager

from domain.models import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_PAPER_COLOR,
    DEFAULT_TITLE,
    TIERS,
)

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, db_path: str = "trophy_todo.db"):
        self.db_path = db_path
        self.conn = sqlite3.connect(self.db_path)
        self.conn.row_factory = sqlite3.Row
        self._tx_depth = 0

    @contextmanager
    def transaction(self):
        """
        Group several repo writes into one SQLite transaction.
        Nested use joins the outer transaction.
        """
        outer = self._tx_depth == 0
        if outer:
            self.conn.execute("BEGIN IMMEDIATE;")
        self._tx_depth += 1
        try:
            yield self.conn
        except BaseException:
            if outer:
                self.conn.rollback()
            raise
        else:
            if outer:
                self.conn.commit()
        finally:
            self._tx_depth -= 1

    def commit(self) -> None:
        # inside transaction() the outermost block commits
        if self._tx_depth == 0:
            self.conn.commit()

    def init_schema(self):
        cur = self.conn.cursor()

        # singleton session row, always id = 1
        cur.execute(f"""
            CREATE TABLE IF NOT EXISTS app_state (
                id INTEGER PRIMARY KEY CHECK (id = 1),
                status TEXT NOT NULL DEFAULT 'planning',
                start_time TEXT,
                end_time TEXT,
                trophy_tier INTEGER,
                title TEXT NOT NULL DEFAULT '{DEFAULT_TITLE}',
                paper_color TEXT NOT NULL DEFAULT '{DEFAULT_PAPER_COLOR}',
                background_color TEXT NOT NULL DEFAULT '{DEFAULT_BACKGROUND_COLOR}'
            );
        """)

        cur.execute("""
            CREATE TABLE IF NOT EXISTS tasks (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                content TEXT NOT NULL,
                completed INTEGER NOT NULL DEFAULT 0,
                sort_order INTEGER NOT NULL
            );
        """)

        tier_cols = ",\n".join(f"tier{t} INTEGER NOT NULL DEFAULT 0" for t in TIERS)
        cur.execute(f"""
            CREATE TABLE IF NOT EXISTS trophy_counts (
                id INTEGER PRIMARY KEY CHECK (id = 1),
                {tier_cols}
            );
        """)

        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_tasks_order ON tasks(sort_order);"
        )
        self.conn.commit()
        logger.debug("schema ready at %s", self.db_path)

    def close(self):
        try:
            self.conn.close()
        except sqlite3.Error:
            logger.warning("failed to close %s", self.db_path, exc_info=True)
