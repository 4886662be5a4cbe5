"""Commands: default instance generation (skeleton) and its document (tree)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dtoinit.commands._base import DtoCommand
from dtoinit.domain.types import Mode

if TYPE_CHECKING:
    from dtoinit.commands._context import AppContext


@click.command(
    cls=DtoCommand,
    examples="""\
  dtoinit skeleton myapp.dto:UserDto
  dtoinit skeleton myapp.dto:UserDto --mode structural
  dtoinit -q skeleton myapp.dto:UserDto > user.sample.json
  dtoinit --json skeleton myapp.dto.UserDto""",
)
@click.argument("target")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in Mode]),
    default=None,
    help="Materialization mode (default from [init] mode).",
)
@click.pass_obj
def skeleton(app: AppContext, target: str, mode: str | None) -> None:
    """Build a fully-populated default instance of TARGET."""
    app.emit(app.service.skeleton(target, Mode(mode) if mode else None))


@click.command(
    cls=DtoCommand,
    examples="""\
  dtoinit tree myapp.dto:UserDto
  dtoinit --json tree myapp.dto:UserDto""",
)
@click.argument("target")
@click.pass_obj
def tree(app: AppContext, target: str) -> None:
    """Show the structural default document of TARGET without converting it."""
    app.emit(app.service.tree(target))
