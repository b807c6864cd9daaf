"""Exception types raised by the prog task tracker."""

from pathlib import Path
from typing import Optional, Union


class ProgError(Exception):
    """Base class for all errors reported to the user."""


class ConfigError(ProgError):
    """Raised when the configuration file cannot be read or is invalid."""


class TaskInputError(ProgError):
    """Raised when raw command input cannot be turned into a Task."""


class DateParseError(TaskInputError):
    """Raised when a due date phrase is not understood."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Could not understand date: '{text}'")


class EmptyTaskNameError(TaskInputError):
    """Raised when a task name is empty or only whitespace."""

    def __init__(self):
        super().__init__("Task name must not be empty")


class StorageError(ProgError):
    """Base class for failures of the task file."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class StorageIOError(StorageError):
    """Raised when the task file cannot be read, written or renamed."""


class DecodeError(StorageError):
    """Raised when the task file exists but its content cannot be parsed.

    The file is left untouched so the user can inspect or repair it.
    """
