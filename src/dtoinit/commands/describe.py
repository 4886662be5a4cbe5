"""Command: show how a DTO class's fields are classified."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dtoinit.commands._base import DtoCommand

if TYPE_CHECKING:
    from dtoinit.commands._context import AppContext


@click.command(
    cls=DtoCommand,
    examples="""\
  dtoinit describe myapp.dto:UserDto
  dtoinit -v describe myapp.dto:UserDto
  dtoinit --json describe myapp.dto:OrderDto""",
)
@click.argument("target")
@click.pass_obj
def describe(app: AppContext, target: str) -> None:
    """List TARGET's fields with their shape and writability."""
    app.emit(app.service.describe(target))
