"""Storage layer for prog: a single JSON file of task records.

Writes never touch the real file directly. New content goes to a temporary
file in the same directory which is then renamed over the real path, so a
crash leaves either the previous content or a stray temporary file, never a
truncated task file.

There is no file locking. Two invocations that add a task at the same time
both load the same collection and the last rename wins, dropping the other
task.
"""

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Union

from .errors import DecodeError, StorageIOError
from .task import Task


logger = logging.getLogger(__name__)


class TaskJsonFormat:
    """Handles conversion between Task objects and the JSON task file."""

    @staticmethod
    def dumps(tasks: Iterable[Task]) -> str:
        """Encode tasks as a pretty-printed JSON array."""
        records = [task.to_dict() for task in tasks]
        return json.dumps(records, indent=2, ensure_ascii=False) + "\n"

    @staticmethod
    def loads(content: str) -> List[Task]:
        """Decode a JSON array of task records.

        Raises:
            ValueError: If the content is not a JSON array of valid records
        """
        try:
            records = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"invalid JSON: {e}") from e

        if not isinstance(records, list):
            raise ValueError(f"expected a list of tasks, got {type(records).__name__}")

        tasks = []
        for index, record in enumerate(records):
            try:
                tasks.append(Task.from_dict(record))
            except KeyError as e:
                raise ValueError(f"task #{index} is missing field {e}") from e
            except (TypeError, ValueError) as e:
                raise ValueError(f"task #{index} is invalid: {e}") from e
        return tasks


class TaskStorage:
    """File-based storage for the task collection."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> List[Task]:
        """Load the task collection.

        A missing or zero-length file means no tasks yet.

        Raises:
            StorageIOError: If the file exists but cannot be read
            DecodeError: If the file is non-empty and cannot be parsed
        """
        if not self.path.exists():
            logger.debug("No task file at %s, starting empty", self.path)
            return []

        try:
            raw = self.path.read_bytes()
        except OSError as e:
            raise StorageIOError(f"Could not read tasks from {self.path}: {e}", self.path) from e

        if not raw:
            logger.debug("Task file %s is empty", self.path)
            return []

        try:
            tasks = TaskJsonFormat.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            raise DecodeError(f"Could not parse task file {self.path}: {e}", self.path) from e

        logger.debug("Loaded %d task(s) from %s", len(tasks), self.path)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        """Atomically replace the task file with the given collection.

        Raises:
            StorageIOError: If writing or renaming fails; the real file keeps
                its previous content
        """
        tasks = list(tasks)
        self._write_atomic(TaskJsonFormat.dumps(tasks))
        logger.debug("Saved %d task(s) to %s", len(tasks), self.path)

    def clear(self) -> None:
        """Empty the task file.

        Goes through the same temporary-file-and-rename path as save(), so the
        result is a zero-length file.
        """
        self._write_atomic("")
        logger.debug("Cleared task file %s", self.path)

    def _write_atomic(self, content: str) -> None:
        # unique temp name per save, so concurrent savers never share an inode
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=self.path.name + ".",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            raise StorageIOError(f"Could not write tasks to {self.path}: {e}", self.path) from e
