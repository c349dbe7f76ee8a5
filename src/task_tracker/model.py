"""Task model for the flat-file task tracker."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .utils import _now_local, format_rfc3339


@dataclass
class Task:
    """A single to-do item as stored in the CSV record store.

    ``id`` is assigned by the store (``max + 1``) and never reused for a
    later task unless the deleted one held the maximum. ``created_at`` is
    always timezone aware and kept at whole-second precision so that it
    survives an RFC3339 round trip unchanged.
    """

    id: int = 0
    description: str = ""
    created_at: datetime = field(default_factory=_now_local)
    is_completed: bool = False

    def complete(self) -> None:
        self.is_completed = True

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict for JSON output."""
        return {
            "id": self.id,
            "description": self.description,
            "created_at": format_rfc3339(self.created_at),
            "is_completed": self.is_completed,
        }
