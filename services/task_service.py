# services/task_service.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import logging
from typing import List, Sequence

from core.errors import InvalidTransition, ValidationError
from core.session_machine import can_check_tasks
from domain.models import Task
from storage.db import Database
from storage.repos import SessionRepo, TaskRepo

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(self, db: Database):
        self.db = db
        self.tasks = TaskRepo(db)
        self.sessions = SessionRepo(db)

    def _require(self, task_id: int) -> Task:
        t = self.tasks.get(task_id)
        if not t:
            raise ValidationError(f"Task {task_id} not found.")
        return t

    # ---- tasks ----
    def create_task(self, content: str) -> Task:
        content = (content or "").strip()
        if not content:
            raise ValidationError("Task content cannot be empty.")
        t = self.tasks.create(content=content)
        logger.debug("task %d created at order %d", t.id, t.order)
        return t

    def list_tasks(self) -> List[Task]:
        return self.tasks.list()

    def rename_task(self, task_id: int, content: str) -> Task:
        content = (content or "").strip()
        if not content:
            raise ValidationError("Task content cannot be empty.")
        self._require(task_id)
        self.tasks.set_content(task_id, content)
        return self.tasks.get(task_id)

    def set_completed(self, task_id: int, completed: bool) -> Task:
        """Check or uncheck a task. Only allowed while the session is running."""
        session = self.sessions.load()
        if not can_check_tasks(session):
            raise InvalidTransition(
                f"Tasks can only be checked while running (session is {session.status.value})."
            )
        self._require(task_id)
        self.tasks.set_completed(task_id, completed)
        return self.tasks.get(task_id)

    def delete_task(self, task_id: int) -> None:
        self._require(task_id)
        self.tasks.delete_task(task_id)
        logger.debug("task %d deleted", task_id)

    def reorder_tasks(self, ids: Sequence[int]) -> List[Task]:
        ids = list(ids)
        if len(set(ids)) != len(ids):
            raise ValidationError("Duplicate task ids in reorder.")
        known = {t.id for t in self.tasks.list()}
        unknown = [i for i in ids if i not in known]
        if unknown:
            raise ValidationError(f"Unknown task ids: {unknown}")

        with self.db.transaction():
            self.tasks.set_orders(ids)
        return self.tasks.list()

    # ---- counts ----
    def count(self) -> int:
        return self.tasks.count()

    def count_completed(self) -> int:
        return self.tasks.count_completed()
