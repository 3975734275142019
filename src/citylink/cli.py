"""Root citylink command: matrix inspection, routes and transitive closure."""

from __future__ import annotations

from pathlib import Path

import click
from click.core import ParameterSource

from citylink import __version__
from citylink.commands._context import AppContext
from citylink.commands.params import VERTEX_PAIR
from citylink.config.logging import bind_invocation
from citylink.config.settings import CityLinkSettings

_EXAMPLES = """\
  citylink -i cities.txt
  citylink -i cities.txt -r 0,2
  citylink -i cities.txt -p
  citylink -i cities.txt -o
  citylink --json -i cities.txt -r 0,2 -p
  citylink -q -i cities.txt -p"""


def _show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo("Examples:")
    click.echo(_EXAMPLES)
    ctx.exit(0)


def _any_argument_given(ctx: click.Context) -> bool:
    return any(
        ctx.get_parameter_source(param.name) is not ParameterSource.DEFAULT
        for param in ctx.command.params
        if param.name
    )


@click.command()
@click.version_option(version=__version__, prog_name="citylink")
@click.option(
    "--examples",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=_show_examples,
    help="Show usage examples and exit.",
)
@click.option(
    "-i",
    "--input",
    "input_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Adjacency matrix file; prints its neighbor table.",
)
@click.option(
    "-r",
    "--route",
    type=VERTEX_PAIR,
    default=None,
    help="Find a path between two cities, e.g. 0,2.",
)
@click.option(
    "-p", "--print-closure", is_flag=True, help="Print the transitive closure (R* table)."
)
@click.option(
    "-o",
    "--output-closure",
    is_flag=True,
    help="Write the transitive closure to out-<input file>.",
)
@click.option(
    "--json", "json_output", is_flag=True, help="Structured JSON output, one object per line."
)
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and timing telemetry.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    input_path: Path | None,
    route: tuple[int, int] | None,
    print_closure: bool,
    output_closure: bool,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """citylink — reachability between cities of an adjacency matrix.

    Operations run in a fixed order: neighbor table, route, closure,
    closure file.  Each one reads the input file afresh.
    """
    if input_path is None:
        if not _any_argument_given(ctx):
            raise click.UsageError("No command line arguments given!", ctx=ctx)
        raise click.UsageError("No input file given!", ctx=ctx)

    settings = CityLinkSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    app = AppContext(settings)
    ctx.obj = app
    bind_invocation(input_path)

    app.emit(app.service.inspect(input_path))
    if route is not None:
        source, destination = route
        app.emit(app.service.route(input_path, source, destination))
    if print_closure:
        app.emit(app.service.closure(input_path))
    if output_closure:
        app.emit(app.service.write_closure(input_path))
