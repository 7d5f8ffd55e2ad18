"""ovk check command - report missing overrides without editing."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from overridekit.cli.utils import build_selection, load_project, selection_options
from overridekit.refactor.emit import render_method
from overridekit.refactor.tweak import OverridePureVirtuals


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@selection_options
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def check_command(
    ctx: click.Context,
    path: Path,
    class_name: str | None,
    offset: int | None,
    line: int | None,
    column: int | None,
    as_json: bool,
) -> None:
    """Show whether the selected class has pure virtual methods left to override.

    Exits with status 1 when there is nothing to do.
    """
    config, model = load_project(path, verbose=ctx.obj.get("verbose", False))
    selection = build_selection(model, class_name=class_name, offset=offset, line=line, column=column)

    tweak = OverridePureVirtuals(config)
    available = tweak.prepare(selection)
    plan = tweak.plan(selection)
    residual = plan.residual if plan is not None else []

    if as_json:
        click.echo(
            json.dumps(
                {
                    "path": model.path,
                    "class": plan.derived.qualified_name if plan is not None else None,
                    "available": available,
                    "missing": [
                        {"owner": m.owner, "name": m.name, "declaration": render_method(m, config.emitter)}
                        for m in residual
                    ],
                }
            )
        )
    elif plan is None:
        click.echo(f"No class selected in {model.path}")
    elif not available:
        click.echo(f"{plan.derived.qualified_name}: nothing to override")
    else:
        table = Table(title=f"{plan.derived.qualified_name}: {len(residual)} missing override(s)")
        table.add_column("Base", style="cyan")
        table.add_column("Declaration")
        for method in residual:
            table.add_row(method.owner, render_method(method, config.emitter))
        Console().print(table)

    if not available:
        ctx.exit(1)
