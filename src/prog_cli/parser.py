"""Natural language due dates and task input validation."""

import logging
from datetime import datetime
from typing import Callable, Optional

import parsedatetime

from .errors import DateParseError, EmptyTaskNameError
from .task import Task, WorkWeight
from .utils.datetime import now_local, to_local_naive


logger = logging.getLogger(__name__)

# Day-before-month order, so "03/04/2026" is the 3rd of April.
DEFAULT_LOCALE = "en_AU"

DateParser = Callable[[str, datetime], datetime]


class NaturalDateParser:
    """Parses phrases like "tomorrow", "in 2 days" or "Jan 19" into datetimes."""

    def __init__(self, locale: str = DEFAULT_LOCALE):
        constants = parsedatetime.Constants(locale, usePyICU=False)
        self.cal = parsedatetime.Calendar(constants, version=parsedatetime.VERSION_CONTEXT_STYLE)

    def parse(self, text: str, reference_time: Optional[datetime] = None) -> datetime:
        """Parse text relative to reference_time into a naive local datetime.

        Raises:
            DateParseError: If nothing in the text is recognised as a date or time
        """
        if text is None or not text.strip():
            raise DateParseError(text or "")

        if reference_time is None:
            reference_time = now_local()
        cleaned = text.strip()

        # Exact ISO timestamps skip the fuzzy parser
        try:
            return to_local_naive(datetime.fromisoformat(cleaned))
        except ValueError:
            pass

        parsed, context = self.cal.parseDT(cleaned, sourceTime=to_local_naive(reference_time))
        if not context.hasDateOrTime:
            raise DateParseError(text)
        return to_local_naive(parsed)


_default_parser = NaturalDateParser()


def parse_natural_date(text: str, reference_time: Optional[datetime] = None) -> datetime:
    """Parse a due date phrase with the default day-first parser."""
    return _default_parser.parse(text, reference_time)


def build_task(
    name: str,
    due_text: str,
    weight: WorkWeight = WorkWeight.MEDIUM,
    reference_time: Optional[datetime] = None,
    date_parser: Optional[DateParser] = None,
) -> Task:
    """Validate raw command input and build a Task from it.

    Raises:
        EmptyTaskNameError: If name is empty or whitespace
        DateParseError: If due_text is not understood
    """
    if name is None or not name.strip():
        raise EmptyTaskNameError()

    if reference_time is None:
        reference_time = now_local()
    parse = date_parser or parse_natural_date

    due_date = parse(due_text, reference_time)
    task = Task(due_date=due_date, name=name.strip(), weight=WorkWeight.parse(weight))

    logger.debug("Adding task: '%s'", task.name)
    logger.debug("Due date: %s (timestamp: %s)", task.due_date, int(task.due_date.timestamp()))
    logger.debug("Work weight: %s", task.weight.label)
    return task
