# -*- coding: utf-8 -*-


class TodoError(Exception):
    """Base class for every error raised by the to-do core."""


class InvalidTransition(TodoError):
    """A session transition (or a task check) was attempted in the wrong state."""


class ValidationError(TodoError, ValueError):
    """Malformed input: tier, timestamp, colour, task content or task id."""
