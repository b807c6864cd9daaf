"""Ordering policies for task collections."""

from operator import attrgetter
from typing import Iterable, List

from .task import SortType, Task


# strategy -> (key, reverse)
_SORT_KEYS = {
    SortType.ALPHABETICAL: (attrgetter("name"), False),
    SortType.CLOSEST_TO_DEADLINE: (attrgetter("due_date"), False),
    SortType.FURTHEST_FROM_DEADLINE: (attrgetter("due_date"), True),
}


def sort_tasks(tasks: List[Task], strategy: SortType) -> List[Task]:
    """Reorder tasks in place by the given strategy and return the same list.

    Only the in-memory list changes; nothing is written until the caller
    saves it. Relative order of tasks with equal keys is not guaranteed.
    """
    key, reverse = _SORT_KEYS[SortType.parse(strategy)]
    tasks.sort(key=key, reverse=reverse)
    return tasks


def sorted_tasks(tasks: Iterable[Task], strategy: SortType) -> List[Task]:
    """Return a new list ordered by strategy, leaving the input untouched."""
    return sort_tasks(list(tasks), strategy)
