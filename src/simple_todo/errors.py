# src/simple_todo/errors.py

from __future__ import annotations


class TodoError(Exception):
    """Base class for errors raised by simple_todo."""


class ValidationError(TodoError):
    """User input rejected before any state change (e.g. empty task text)."""


class StorageReadError(TodoError):
    """Persisted tasks could not be read or decoded."""


class StorageWriteError(TodoError):
    """Persisted tasks could not be written."""


class InvalidTransition(TodoError):
    """Confirmation workflow driven out of order."""
