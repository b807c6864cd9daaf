"""Command-line interface for prog."""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import click
from rich.console import Console

from .config import load_config, resolve_tasks_path
from .errors import ConfigError, ProgError
from .processor import (
    AddCommand,
    Command,
    CommandProcessor,
    ListCommand,
    ResetCommand,
)
from .render import render_tasks
from .storage import TaskStorage
from .task import SortType, WorkWeight


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class CliContext:
    processor: CommandProcessor
    console: Console
    error_console: Console


def setup_logging(level: str) -> None:
    """Configure the root logger; a no-op if handlers already exist."""
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def get_console(no_color: bool = False, stderr: bool = False) -> Console:
    return Console(no_color=no_color, stderr=stderr)


def _fail(error_console: Console, message: str) -> None:
    error_console.print(f"Error: {message}", style="red", markup=False, soft_wrap=True)
    sys.exit(1)


def run_command(obj: CliContext, command: Command) -> None:
    """Execute a command and print its result, exiting 1 on failure."""
    try:
        result = obj.processor.execute(command)
    except ProgError as e:
        logger.error("%s failed: %s", type(command).__name__, e)
        _fail(obj.error_console, str(e))
    except Exception as e:
        logger.exception("Unexpected error while running %s", type(command).__name__)
        _fail(obj.error_console, f"Unexpected error: {e}")
    else:
        if result.message:
            obj.console.print(result.message, style="green", markup=False)
        else:
            obj.console.print(render_tasks(result.tasks))


@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Path to config file")
@click.option("--tasks-file", type=click.Path(dir_okay=False, path_type=Path),
              envvar="PROG_TASKS_FILE", help="Path to the task file")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def main(ctx, config_path, tasks_file, verbose):
    """A strict, fast task tracker."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        setup_logging("WARNING")
        logger.error("Configuration error: %s", e)
        _fail(get_console(stderr=True), f"Configuration error: {e}")

    setup_logging("DEBUG" if verbose else config.log_level)

    path = resolve_tasks_path(config, override=tasks_file)
    logger.debug("Using task file %s", path)

    ctx.obj = CliContext(
        processor=CommandProcessor(TaskStorage(path)),
        console=get_console(no_color=config.no_color),
        error_console=get_console(no_color=config.no_color, stderr=True),
    )


@main.command()
@click.argument("task")
@click.argument("due")
@click.argument("weight", type=click.Choice(WorkWeight.cli_choices(), case_sensitive=False),
                default=WorkWeight.MEDIUM.cli_name)
@click.pass_obj
def add(obj, task, due, weight):
    """Add TASK (e.g. "392 exam") due at DUE (e.g. "tomorrow", "in 2 days", "Jan 19").

    WEIGHT is the amount of work, ultra-light to ultra-heavy.
    """
    run_command(obj, AddCommand(name=task, due_text=due, weight=WorkWeight.parse(weight)))


@main.command(name="list")
@click.option("--sort", "sort_type", type=click.Choice(SortType.cli_choices(), case_sensitive=False),
              help="Order the output without changing the saved order")
@click.pass_obj
def list_tasks(obj, sort_type):
    """List tasks in their saved order."""
    sort = SortType.parse(sort_type) if sort_type else None
    run_command(obj, ListCommand(sort=sort))


@main.command()
@click.pass_obj
def reset(obj):
    """Remove all tasks."""
    run_command(obj, ResetCommand())


if __name__ == "__main__":
    main()
