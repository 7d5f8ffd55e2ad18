"""ovk apply command - insert missing overrides into a class."""

from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.syntax import Syntax

from overridekit.cli.utils import build_selection, command_error, load_project, selection_options
from overridekit.core.errors import OverrideKitError
from overridekit.refactor.registry import default_registry
from overridekit.refactor.tweak import OverridePureVirtuals


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@selection_options
@click.option("--stub-bodies", is_flag=True, help="Emit bodies that fail to compile until implemented")
@click.option("--placeholder-prefix", help="Name unnamed parameters <prefix>1, <prefix>2, ...")
@click.option("--indent", help="Whitespace prepended to each inserted line")
@click.option(
    "--write",
    "mode",
    flag_value="write",
    help="Write the result back to PATH",
)
@click.option(
    "--print",
    "mode",
    flag_value="print",
    help="Print the whole transformed file",
)
@click.pass_context
def apply_command(
    ctx: click.Context,
    path: Path,
    class_name: str | None,
    offset: int | None,
    line: int | None,
    column: int | None,
    stub_bodies: bool,
    placeholder_prefix: str | None,
    indent: str | None,
    mode: str | None,
) -> None:
    """Override the pure virtual methods the selected class is missing.

    PATH is a C++ source or header file. Prints a unified diff unless
    --write or --print is given.
    """
    emitter: dict[str, Any] = {}
    if stub_bodies:
        emitter["body_style"] = "stub"
    if placeholder_prefix is not None:
        emitter["placeholder_prefix"] = placeholder_prefix
    if indent is not None:
        emitter["indent"] = indent
    overrides = {"emitter": emitter} if emitter else {}

    config, model = load_project(path, verbose=ctx.obj.get("verbose", False), **overrides)
    selection = build_selection(model, class_name=class_name, offset=offset, line=line, column=column)

    tweak = default_registry(config).get(OverridePureVirtuals.id)
    if not tweak.prepare(selection):
        click.echo("Nothing to override for this selection", err=True)
        ctx.exit(1)

    try:
        effect = tweak.apply(selection)
        if mode == "write":
            path.write_text(effect.apply_to(model.source), encoding="utf-8", newline="")
            click.echo(f"Updated {path}", err=True)
        elif mode == "print":
            click.echo(effect.apply_to(model.source), nl=False)
        else:
            Console().print(Syntax(effect.unified_diff(model.source), "diff", theme="ansi_dark"))
    except OverrideKitError as e:
        raise command_error(e) from e
