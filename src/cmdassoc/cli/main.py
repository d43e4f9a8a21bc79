"""CLI entry point for cmdassoc.

Invoked as::

    cmdassoc [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m cmdassoc.cli.main

Commands
--------
version        Show version information
resolve        Show which command opens a file
commands       List registered commands
associations   List user and system associations
add-command    Register or replace a custom command
associate      Append a user association
migrate        Convert legacy XML stores to the current format
"""
from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import Any, NoReturn, TypeVar

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from cmdassoc import CommandContext, CommandError, __version__
from cmdassoc.command import Command, CommandType
from cmdassoc.filters import (
    AttributeFilter,
    CompositeFilter,
    FileAttribute,
    FileFilter,
    FilePermission,
    NameMaskFilter,
    PermissionFilter,
    decompose,
)
from cmdassoc.persistence import LoadOutcome

F = TypeVar("F", bound=Callable[..., Any])

console = Console()
err_console = Console(stderr=True)


def _fail(message: str) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {message}")
    sys.exit(1)


def _context(ctx: click.Context, *, load: bool = True) -> CommandContext:
    """Build the command context for this invocation, exiting on error."""
    prefs_dir = ctx.obj.get("prefs_dir") if ctx.obj else None
    try:
        return CommandContext.create(prefs_dir, load=load)
    except (CommandError, OSError) as exc:
        _fail(str(exc))


def _save(context: CommandContext) -> None:
    try:
        context.save()
    except (CommandError, OSError) as exc:
        _fail(f"Cannot save: {exc}")


def _describe_filter(filter: FileFilter) -> str:  # noqa: A002
    parts = []
    for instruction in decompose(filter):
        if instruction.pattern is not None:
            flags = "" if not instruction.case_sensitive else " (case)"
            kind = "regex" if instruction.regex else "mask"
            parts.append(f"{kind} {instruction.pattern}{flags}")
        else:
            prefix = "" if instruction.value else "not "
            parts.append(f"{prefix}{instruction.kind.value}")
    return ", ".join(parts) or "any file"


def _kind_color(command: Command) -> str:
    return "cyan" if command.is_system else "green"


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="cmdassoc")
@click.option(
    "--prefs-dir",
    type=click.Path(file_okay=False),
    default=None,
    envvar="CMDASSOC_PREFS_DIR",
    help="Directory holding commands.yaml and associations.yaml",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output")
@click.pass_context
def cli(ctx: click.Context, prefs_dir: str | None, verbose: bool) -> None:
    """Decide which command line opens a file, and manage custom commands."""
    ctx.ensure_object(dict)
    ctx.obj["prefs_dir"] = prefs_dir
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    table = Table(show_header=False, box=None)
    table.add_row("[bold]cmdassoc[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# resolve command
# ---------------------------------------------------------------------------


@cli.command(name="resolve")
@click.argument("file", type=click.Path(exists=True))
@click.option(
    "--no-execute",
    is_flag=True,
    default=False,
    help="Do not fall back to running the file as an executable",
)
@click.pass_context
def resolve_command(ctx: click.Context, file: str, no_execute: bool) -> None:
    """Show which command opens FILE."""
    context = _context(ctx)
    try:
        command = context.resolve_path(file, allow_executable_fallback=not no_execute)
    except OSError as exc:
        _fail(f"Cannot inspect {file}: {exc}")

    if command is None:
        console.print(f"[yellow]No command[/yellow] opens {file}")
        sys.exit(1)
    console.print(f"[bold]{command.label}[/bold] ({command.alias}): {command.template}")


# ---------------------------------------------------------------------------
# commands command
# ---------------------------------------------------------------------------


@cli.command(name="commands")
@click.pass_context
def commands_command(ctx: click.Context) -> None:
    """List registered commands, sorted by alias."""
    context = _context(ctx)
    default = context.commands.default_command

    table = Table(title="Commands", show_lines=False)
    table.add_column("Alias", style="bold", min_width=8)
    table.add_column("Type", min_width=6)
    table.add_column("Display name")
    table.add_column("Command line")

    for command in context.commands.list_commands():
        color = _kind_color(command)
        alias = command.alias + (" [dim](default)[/dim]" if command is default else "")
        table.add_row(
            alias,
            f"[{color}]{command.kind.value}[/{color}]",
            command.display_name or "",
            command.template,
        )
    console.print(table)


# ---------------------------------------------------------------------------
# associations command
# ---------------------------------------------------------------------------


@cli.command(name="associations")
@click.pass_context
def associations_command(ctx: click.Context) -> None:
    """List user associations, then system associations, in match order."""
    context = _context(ctx)

    table = Table(title="Associations", show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("Source", min_width=6)
    table.add_column("Command", style="bold")
    table.add_column("Filter")

    rows = [("user", a) for a in context.associations.iter_user()]
    rows += [("system", a) for a in context.associations.iter_system()]
    for index, (source, association) in enumerate(rows, start=1):
        table.add_row(
            str(index),
            source,
            association.command.alias,
            _describe_filter(association.filter),
        )
    console.print(table)


# ---------------------------------------------------------------------------
# add-command command
# ---------------------------------------------------------------------------


@cli.command(name="add-command")
@click.argument("alias")
@click.argument("template")
@click.option("--display", default=None, help="Human-readable name")
@click.option("--system", is_flag=True, default=False, help="Mark the command as a system command")
@click.pass_context
def add_command_command(
    ctx: click.Context, alias: str, template: str, display: str | None, system: bool
) -> None:
    """Register or replace the command ALIAS with TEMPLATE.

    \b
        cmdassoc add-command view 'less $f' --display Pager
    """
    context = _context(ctx)
    kind = CommandType.SYSTEM if system else CommandType.OTHER
    try:
        command = context.add_command(alias, template, display, kind)
    except ValueError as exc:
        _fail(str(exc))
    _save(context)
    console.print(f"[green]Registered[/green] {command.alias}: {command.template}")


# ---------------------------------------------------------------------------
# associate command
# ---------------------------------------------------------------------------


def _toggle_option(name: str, help_text: str) -> Callable[[F], F]:
    return click.option(f"--{name}/--not-{name}", default=None, help=help_text)


@cli.command(name="associate")
@click.argument("alias")
@click.option("--mask", default=None, help="File name mask, a glob unless --regex is given")
@click.option("--regex", is_flag=True, default=False, help="Treat --mask as a regular expression")
@click.option("--case-sensitive", is_flag=True, default=False, help="Match --mask case-sensitively")
@_toggle_option("hidden", "Require the file to be (or not be) hidden")
@_toggle_option("symlink", "Require the file to be (or not be) a symbolic link")
@_toggle_option("readable", "Require the read permission (or its absence)")
@_toggle_option("writable", "Require the write permission (or its absence)")
@_toggle_option("executable", "Require the execute permission (or its absence)")
@click.pass_context
def associate_command(
    ctx: click.Context,
    alias: str,
    mask: str | None,
    regex: bool,
    case_sensitive: bool,
    hidden: bool | None,
    symlink: bool | None,
    readable: bool | None,
    writable: bool | None,
    executable: bool | None,
) -> None:
    """Route files matching the given filters to the command ALIAS.

    \b
        cmdassoc associate view --mask '*.log'
        cmdassoc associate openEXE --mask '*.sh' --executable
    """
    leaves: list[FileFilter] = []
    try:
        if mask is not None:
            leaves.append(NameMaskFilter(mask, case_sensitive=case_sensitive, regex=regex))
    except ValueError as exc:
        _fail(str(exc))
    for attribute, value in ((FileAttribute.HIDDEN, hidden), (FileAttribute.SYMLINK, symlink)):
        if value is not None:
            leaves.append(AttributeFilter(attribute, inverted=not value))
    permissions = (
        (FilePermission.READ, readable),
        (FilePermission.WRITE, writable),
        (FilePermission.EXECUTE, executable),
    )
    for permission, value in permissions:
        if value is not None:
            leaves.append(PermissionFilter(permission, required=value))

    filter_: FileFilter = leaves[0] if len(leaves) == 1 else CompositeFilter(tuple(leaves))
    context = _context(ctx)
    try:
        context.associate(alias, filter_)
    except CommandError as exc:
        _fail(str(exc))
    _save(context)
    console.print(f"[green]Associated[/green] {alias}: {_describe_filter(filter_)}")


# ---------------------------------------------------------------------------
# migrate command
# ---------------------------------------------------------------------------


@cli.command(name="migrate")
@click.pass_context
def migrate_command(ctx: click.Context) -> None:
    """Load the stores and write any legacy XML store in the current format."""
    context = _context(ctx, load=False)
    try:
        outcomes = context.persistence.load()
    except (CommandError, OSError) as exc:
        _fail(str(exc))
    _save(context)

    names = ("commands", "associations")
    paths = (context.persistence.commands_file, context.persistence.associations_file)
    for name, outcome, path in zip(names, outcomes, paths):
        if outcome is LoadOutcome.MIGRATED:
            console.print(f"[green]Migrated[/green] {name} to {path}")
        elif outcome is LoadOutcome.CURRENT:
            console.print(f"[dim]{name} already current[/dim] ({path})")
        else:
            console.print(f"[dim]No {name} store found[/dim]")


if __name__ == "__main__":
    cli()
