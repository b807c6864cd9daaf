"""prog - a strict, fast command-line task tracker."""

__version__ = "0.1.0"

from .task import Task, WorkWeight, SortType
from .sorting import sort_tasks
from .storage import TaskStorage
from .processor import (
    AddCommand,
    ListCommand,
    ResetCommand,
    CommandProcessor,
    CommandResult,
)

__all__ = [
    "Task",
    "WorkWeight",
    "SortType",
    "sort_tasks",
    "TaskStorage",
    "AddCommand",
    "ListCommand",
    "ResetCommand",
    "CommandProcessor",
    "CommandResult",
    "__version__",
]
