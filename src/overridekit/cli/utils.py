"""CLI utilities."""

from pathlib import Path
from typing import Any

import click
import structlog

from overridekit.config.loader import load_config
from overridekit.config.models import OverrideKitConfig
from overridekit.core.errors import OverrideKitError
from overridekit.core.logging import configure_logging, get_log_file_path
from overridekit.refactor.tweak import Selection
from overridekit.semantic.cpp import CppParser
from overridekit.semantic.model import SemanticModel

log = structlog.get_logger(__name__)


def selection_options(fn: Any) -> Any:
    """Attach --class/--offset/--line/--column options to a command."""
    fn = click.option("--column", type=click.IntRange(min=1), help="1-based column (with --line)")(fn)
    fn = click.option("--line", type=click.IntRange(min=1), help="1-based line of the cursor")(fn)
    fn = click.option("--offset", type=click.IntRange(min=0), help="Character offset of the cursor")(fn)
    fn = click.option("--class", "class_name", help="Class to select, qualified or simple name")(fn)
    return fn


def line_column_to_offset(source: str, line: int, column: int) -> int:
    """Character offset of a 1-based line/column position."""
    lines = source.splitlines(keepends=True)
    if line > len(lines):
        raise click.BadParameter(f"file has only {len(lines)} lines", param_hint="--line")
    width = len(lines[line - 1].rstrip("\r\n"))
    # Column width + 1 addresses the end of the line
    if column > width + 1:
        raise click.BadParameter(f"line {line} has only {width} columns", param_hint="--column")
    return sum(len(text) for text in lines[: line - 1]) + column - 1


def build_selection(
    model: SemanticModel,
    *,
    class_name: str | None,
    offset: int | None,
    line: int | None,
    column: int | None,
) -> Selection:
    """Turn exactly one of the selection options into a Selection.

    Raises:
        click.UsageError: No selection, or more than one.
        click.ClickException: The named class is not defined in the file.
    """
    given = [class_name is not None, offset is not None, line is not None]
    if sum(given) != 1:
        raise click.UsageError("Select a class with exactly one of --class, --offset or --line")
    if column is not None and line is None:
        raise click.BadParameter("requires --line", param_hint="--column")
    if class_name is not None:
        node = model.find_type(class_name)
        if node is None:
            raise click.ClickException(f"No definition of class '{class_name}' in {model.path}")
        return Selection.of_type(model, node)
    if line is not None:
        offset = line_column_to_offset(model.source, line, column or 1)
    assert offset is not None
    return Selection(model=model, offset=offset)


def load_project(
    path: Path,
    *,
    verbose: bool,
    **overrides: Any,
) -> tuple[OverrideKitConfig, SemanticModel]:
    """Load config for ``path``'s directory, set up logging and parse ``path``."""
    try:
        config = load_config(path.resolve().parent, **overrides)
        if not verbose:
            configure_logging(config=config.logging)
        model = CppParser().parse_file(path)
    except OverrideKitError as e:
        raise command_error(e) from e
    return config, model


def command_error(error: OverrideKitError) -> click.ClickException:
    """Log ``error`` and turn it into a ClickException pointing at the log file, if any."""
    log.error("command_failed", error=error.error_name, message=error.message, **error.details)
    log_file = get_log_file_path()
    if log_file:
        return click.ClickException(f"{error}. See {log_file} for details.")
    return click.ClickException(str(error))
