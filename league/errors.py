"""League error taxonomy.

Business-rule failures raise a LeagueError subclass; callers catch them and
report `reason` (and `code`, for selection failures). StorageError is kept
apart: it wraps database failures and is never interpreted or retried here.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class SelectionError(str, Enum):
    """Why a lineup selection was rejected."""

    EMPTY_SELECTION = "EmptySelection"
    TOO_MANY_SELECTED = "TooManySelected"
    DUPLICATE_SLOT = "DuplicateSlot"
    SLOT_NOT_ON_ROSTER = "SlotNotOnRoster"
    SLOT_EXHAUSTED = "SlotExhausted"


class LeagueError(Exception):
    """Base for recoverable business-rule failures."""

    reason = "error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message, "reason": self.reason}


class NotFound(LeagueError):
    reason = "not_found"
    status_code = 404


class InvalidSelection(LeagueError):
    """Lineup selection rejected by the validator."""

    reason = "invalid_selection"
    status_code = 400

    def __init__(self, message: str, code: Optional[SelectionError] = None):
        super().__init__(message)
        self.code = code

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.code is not None:
            data["code"] = self.code.value
        return data


class InvalidInput(LeagueError):
    """A field value the league cannot store (unknown status, unparseable deadline)."""

    reason = "invalid_input"
    status_code = 400


class Locked(LeagueError):
    reason = "locked"
    status_code = 403


class Unauthorized(LeagueError):
    reason = "unauthorized"
    status_code = 403


class SlotExhausted(LeagueError):
    reason = "slot_exhausted"
    status_code = 400


class Conflict(LeagueError):
    """A write touched an unexpected number of rows, or would collide with an existing row."""

    reason = "conflict"
    status_code = 409


class StorageError(Exception):
    """Opaque persistence failure (connection error, aborted transaction)."""
