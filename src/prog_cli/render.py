"""Terminal rendering of task collections with rich."""

from datetime import datetime, timedelta
from typing import Iterable, Optional, Union

from rich import box
from rich.table import Table
from rich.text import Text

from .task import Task
from .utils.datetime import now_local


NO_TASKS_MESSAGE = "No tasks found."
OVERDUE_LABEL = "OVERDUE"
BAR_UNIT = "■ "


def format_time_left(task: Task, now: Optional[datetime] = None) -> str:
    """Format time remaining as "2d 5h", "5h" or OVERDUE."""
    if task.is_overdue(now):
        return OVERDUE_LABEL

    remaining = task.time_remaining(now)
    days = remaining.days
    hours = remaining.seconds // 3600
    if days == 0:
        return f"{hours}h"
    return f"{days}d {hours}h"


def bar_style(days: int) -> str:
    """Colour band for the visual bar by whole days remaining."""
    if days <= 2:
        return "red"
    if days <= 5:
        return "yellow"
    return "green"


def visual_bar(remaining: timedelta) -> Text:
    """One block per whole day remaining, coloured by urgency."""
    days = remaining.days
    return Text(BAR_UNIT * max(days, 0), style=bar_style(days))


def render_tasks(tasks: Iterable[Task], now: Optional[datetime] = None) -> Union[Table, str]:
    """Build a table of tasks, or a plain message if there are none."""
    tasks = list(tasks)
    if not tasks:
        return NO_TASKS_MESSAGE

    if now is None:
        now = now_local()

    table = Table(box=box.SQUARE)
    table.add_column("name")
    table.add_column("weight")
    table.add_column("time_left")
    table.add_column("visual_bar")

    for task in tasks:
        remaining = task.time_remaining(now)
        table.add_row(
            Text(task.name),
            task.weight.label,
            format_time_left(task, now),
            visual_bar(remaining),
        )

    return table
