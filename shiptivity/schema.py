"""
Client schema and swimlanes.

Board layout:
  Backlog → In Progress → Complete

Each lane keeps a dense priority ranking: priorities of the clients in a lane
are exactly 1..N, and priority 1 sits at the top of the swimlane.
"""
from enum import Enum
from dataclasses import dataclass
from typing import Dict, Any
import sqlite3


class Lane(Enum):
    """The three fixed swimlanes, stored in the ``status`` column."""
    BACKLOG = "backlog"
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"

    @classmethod
    def values(cls) -> list:
        return [lane.value for lane in cls]


@dataclass
class Client:
    """A client card on the board."""

    id: int
    name: str
    description: str = ""
    status: Lane = Lane.BACKLOG
    priority: int = 1              # 1 = most urgent within the lane

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON shape served by the API."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "status": self.status.value,
            "priority": self.priority,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Client":
        """Deserialize from dict (API shape or a database row)."""
        status = data.get("status")
        return cls(
            id=int(data["id"]),
            name=data.get("name", ""),
            description=data.get("description") or "",
            status=status if isinstance(status, Lane) else Lane(status),
            priority=int(data["priority"]),
        )

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Client":
        return cls.from_dict(dict(row))
