"""Command execution for prog: Add, List and Reset against the task file."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Union

from .parser import DateParser, build_task, parse_natural_date
from .sorting import sort_tasks, sorted_tasks
from .storage import TaskStorage
from .task import SortType, Task, WorkWeight
from .utils.datetime import now_local


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddCommand:
    """Add a task from raw user input."""
    name: str
    due_text: str
    weight: WorkWeight = WorkWeight.MEDIUM


@dataclass(frozen=True)
class ListCommand:
    """Show the tasks as saved, optionally re-ordered for display only."""
    sort: Optional[SortType] = None


@dataclass(frozen=True)
class ResetCommand:
    """Remove every task."""


Command = Union[AddCommand, ListCommand, ResetCommand]


@dataclass
class CommandResult:
    """Outcome of a command: the tasks to display and an optional message."""
    tasks: List[Task] = field(default_factory=list)
    message: Optional[str] = None


class CommandProcessor:
    """Runs commands against a TaskStorage.

    Holds no state between invocations apart from what is in the task file.
    Errors from parsing and storage propagate to the caller unchanged.
    """

    def __init__(
        self,
        storage: TaskStorage,
        date_parser: Optional[DateParser] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.storage = storage
        self.date_parser = date_parser or parse_natural_date
        self.clock = clock or now_local

    def execute(self, command: Command) -> CommandResult:
        if isinstance(command, AddCommand):
            return self.add(command)
        if isinstance(command, ListCommand):
            return self.list(command)
        if isinstance(command, ResetCommand):
            return self.reset(command)
        raise TypeError(f"Unknown command: {command!r}")

    def add(self, command: AddCommand) -> CommandResult:
        """Parse, append, sort by closest deadline and save.

        The date is parsed before the task file is touched. If the save
        fails the new task is lost and the error is raised.
        """
        task = build_task(
            command.name,
            command.due_text,
            command.weight,
            reference_time=self.clock(),
            date_parser=self.date_parser,
        )

        tasks = self.storage.load()
        tasks.append(task)
        sort_tasks(tasks, SortType.CLOSEST_TO_DEADLINE)
        self.storage.save(tasks)

        logger.info("Added task '%s' due %s", task.name, task.due_date.isoformat())
        return CommandResult(tasks=tasks)

    def list(self, command: Optional[ListCommand] = None) -> CommandResult:
        tasks = self.storage.load()
        if command is not None and command.sort is not None:
            tasks = sorted_tasks(tasks, command.sort)
        return CommandResult(tasks=tasks)

    def reset(self, command: Optional[ResetCommand] = None) -> CommandResult:
        self.storage.clear()
        logger.info("Cleared all tasks in %s", self.storage.path)
        return CommandResult(tasks=[], message="Tasks cleared.")
