# -*- coding: utf-8 -*-
"""Runtime settings, read from the environment."""

import logging
import os
from dataclasses import dataclass

import click

from domain.models import ClearMode

ENV_DB = "TROPHY_TODO_DB"
ENV_CLEAR_MODE = "TROPHY_TODO_CLEAR_MODE"
ENV_LOG_LEVEL = "TROPHY_TODO_LOG_LEVEL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class Settings:
    db_path: str = "trophy_todo.db"
    clear_mode: ClearMode = ClearMode.COMPLETED_ONLY
    log_level: str = "WARNING"

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)


def _parse_clear_mode(raw: str) -> ClearMode:
    try:
        return ClearMode((raw or "").strip().lower())
    except ValueError:
        valid = ", ".join(m.value for m in ClearMode)
        raise click.ClickException(
            f"Invalid clear mode '{raw}'. Valid options: {valid}"
        )


def get_settings() -> Settings:
    """Build settings from environment variables, falling back to defaults."""
    defaults = Settings()
    level = os.environ.get(ENV_LOG_LEVEL, defaults.log_level).strip().upper()
    if level not in LOG_LEVELS:
        raise click.ClickException(
            f"Invalid log level '{level}'. Valid options: {', '.join(LOG_LEVELS)}"
        )

    return Settings(
        db_path=os.environ.get(ENV_DB, defaults.db_path),
        clear_mode=_parse_clear_mode(
            os.environ.get(ENV_CLEAR_MODE, defaults.clear_mode.value)
        ),
        log_level=level,
    )
