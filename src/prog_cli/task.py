"""Task data model for the prog task tracker."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from functools import total_ordering
from typing import Any, Dict, List, Optional

from .utils.datetime import now_local, parse_iso_string, to_iso_string, to_local_naive


def _normalize_choice(value: str) -> str:
    return value.strip().lower().replace("_", "").replace("-", "").replace(" ", "")


@total_ordering
class WorkWeight(Enum):
    """Relative amount of work a task needs, lightest first."""
    ULTRA_LIGHT = "UltraLight"
    LIGHT = "Light"
    MEDIUM = "Medium"
    HEAVY = "Heavy"
    ULTRA_HEAVY = "UltraHeavy"

    @property
    def rank(self) -> int:
        return list(WorkWeight).index(self)

    @property
    def cli_name(self) -> str:
        """Name used on the command line, e.g. ``ultra-light``."""
        return self.name.lower().replace("_", "-")

    @property
    def label(self) -> str:
        return self.value

    def __lt__(self, other):
        if not isinstance(other, WorkWeight):
            return NotImplemented
        return self.rank < other.rank

    @classmethod
    def cli_choices(cls) -> List[str]:
        return [weight.cli_name for weight in cls]

    @classmethod
    def parse(cls, value: str) -> "WorkWeight":
        """Accept CLI spellings (``ultra-light``) and stored names (``UltraLight``).

        Raises:
            ValueError: If the value names no weight
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Invalid work weight: {value!r}")
        wanted = _normalize_choice(value)
        for weight in cls:
            if _normalize_choice(weight.value) == wanted:
                return weight
        raise ValueError(f"Invalid work weight: {value!r}")


class SortType(Enum):
    """Ordering strategies for a task collection."""
    ALPHABETICAL = "alphabetical"
    CLOSEST_TO_DEADLINE = "closest-to-deadline"
    FURTHEST_FROM_DEADLINE = "furthest-from-deadline"

    @classmethod
    def cli_choices(cls) -> List[str]:
        return [sort_type.value for sort_type in cls]

    @classmethod
    def parse(cls, value: str) -> "SortType":
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Invalid sort type: {value!r}")
        wanted = _normalize_choice(value)
        for sort_type in cls:
            if _normalize_choice(sort_type.value) == wanted:
                return sort_type
        raise ValueError(f"Invalid sort type: {value!r}")


@dataclass(frozen=True)
class Task:
    """A due item. Immutable once created; corrections mean re-adding."""

    due_date: datetime
    name: str
    weight: WorkWeight = WorkWeight.MEDIUM

    def __post_init__(self):
        # frozen, so bypass __setattr__ to normalize the timestamp
        object.__setattr__(self, "due_date", to_local_naive(self.due_date))

    def time_remaining(self, now: Optional[datetime] = None) -> timedelta:
        """Time left until the task is due; negative once it has passed."""
        if now is None:
            now = now_local()
        return self.due_date - to_local_naive(now)

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        return self.time_remaining(now) < timedelta(0)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the Task to its persisted record."""
        return {
            "due_date": to_iso_string(self.due_date),
            "name": self.name,
            "weight": self.weight.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Create a Task from its persisted record.

        Raises:
            TypeError: If data is not a mapping or a field has the wrong type
            KeyError: If a field is missing
            ValueError: If a field value is invalid
        """
        if not isinstance(data, dict):
            raise TypeError(f"Task record must be an object, got {type(data).__name__}")

        name = data["name"]
        if not isinstance(name, str):
            raise TypeError(f"Task name must be a string, got {type(name).__name__}")
        if not name.strip():
            raise ValueError("Task name must not be empty")

        return cls(
            due_date=parse_iso_string(data["due_date"]),
            name=name,
            weight=WorkWeight.parse(data["weight"]),
        )
