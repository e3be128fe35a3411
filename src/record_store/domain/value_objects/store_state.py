"""Lifecycle states of a record store."""

from __future__ import annotations

from enum import Enum, auto


class StoreState(Enum):
    """Record store lifecycle states.

    State machine:

        CLOSED ──create_or_replace()──> OPEN
          ^                              │
          │                           close()
          │                              │
          └──────────────────────────────┘
        CLOSED ──reopen_append()──> OPEN

    Record-level operations are only legal in OPEN. Every other
    transition from the wrong state is rejected with StateError.
    """

    CLOSED = auto()
    """No file handle is held."""

    OPEN = auto()
    """The store owns an open binary read/write handle."""

    def is_open(self) -> bool:
        """Check if record-level operations are allowed."""
        return self is StoreState.OPEN
