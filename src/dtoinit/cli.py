"""Root CLI group for dtoinit with global flags and command registration."""

from __future__ import annotations

import click

from dtoinit import __version__
from dtoinit.commands import register_commands
from dtoinit.commands._base import DtoGroup
from dtoinit.commands._context import AppContext
from dtoinit.config.settings import DtoInitSettings


@click.group(
    cls=DtoGroup,
    invoke_without_command=True,
    examples="""\
  dtoinit skeleton myapp.dto:UserDto
  dtoinit describe myapp.dto:UserDto
  dtoinit -c ./dtoinit.toml --json tree myapp.dto:UserDto""",
)
@click.version_option(version=__version__, prog_name="dtoinit")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the generated document.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """dtoinit — default instances for DTO classes."""
    ctx.ensure_object(dict)
    settings = DtoInitSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
