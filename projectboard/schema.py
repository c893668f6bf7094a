"""
Project schema.

Project lifecycle:
  active ⇄ finished

A Project never changes after construction. The store replaces the record
when the status moves, so every snapshot handed out stays valid forever.
"""
import time
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Tuple


class ProjectStatus(Enum):
    """The two lanes a project can live in."""
    ACTIVE = "active"
    FINISHED = "finished"

    @classmethod
    def from_str(cls, value: "str | ProjectStatus") -> "ProjectStatus":
        """Coerce a status value. Raises ValueError for unknown strings."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Invalid status: {value!r} (expected one of {[s.value for s in cls]})"
            ) from None


def make_project_id() -> str:
    """Generate a sortable unique project ID (ms-precision timestamp + random hex)."""
    ts = int(time.time() * 1000)
    rand = uuid.uuid4().hex[:8]
    return f"prj-{ts}-{rand}"


@dataclass(frozen=True)
class Project:
    """One project card's data."""

    id: str
    title: str
    description: str
    people: int
    status: ProjectStatus = ProjectStatus.ACTIVE
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def persons(self) -> str:
        """Team size label, e.g. '1 person' or '3 persons'."""
        if self.people == 1:
            return "1 person"
        return f"{self.people} persons"

    def with_status(self, status: ProjectStatus) -> "Project":
        return replace(self, status=status)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "people": self.people,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        created_at = data.get("created_at")
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            description=data.get("description", ""),
            people=int(data.get("people", 1)),
            status=ProjectStatus.from_str(data.get("status", "active")),
            created_at=(
                datetime.fromisoformat(created_at)
                if created_at
                else datetime.now(timezone.utc)
            ),
        )


# Read-only view of the store's sequence, in insertion order
Snapshot = Tuple[Project, ...]
