"""
Main CLI application entry point.

This module contains the main Typer application and command handlers
for GroupMe Utils.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import NoReturn, Optional, Tuple

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from groupme_utils import VERSION
from groupme_utils.config.settings import GroupMeSettings, get_settings
from groupme_utils.core.client import (
    GroupMeClient,
    GroupMeError,
    Transport,
    create_user_friendly_message,
)
from groupme_utils.core.models import GroupMessages
from groupme_utils.services.export import export_like_matrix, export_messages
from groupme_utils.utils.progress import ProgressBar

# Create the main Typer application
app = typer.Typer(
    name="groupme-utils",
    help="GroupMe Utils - browse and export GroupMe groups from the command line",
    add_completion=False,
    rich_markup_mode="rich",
)

# Rich console for output
console = Console()

# Transport override used by tests; None means the default httpx transport
_transport: Optional[Transport] = None


class _State:
    token: Optional[str] = None
    debug: bool = False


state = _State()


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"[bold blue]GroupMe Utils[/bold blue] version [green]{VERSION}[/green]")
        raise typer.Exit()


def configure_logging(settings: GroupMeSettings) -> None:
    """Route log records through Rich at the configured level."""
    logging.basicConfig(
        level=settings.effective_log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=settings.debug)],
        force=True,
    )


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    token: Optional[str] = typer.Option(
        None,
        "--token",
        "-t",
        help="GroupMe access token (defaults to GROUPME_TOKEN)",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """
    GroupMe Utils - browse and export GroupMe groups.

    List groups, page through message history, like messages and export
    history to CSV.
    """
    state.token = token
    state.debug = debug


def _load_settings() -> GroupMeSettings:
    overrides = {}
    if state.token:
        overrides["token"] = state.token
    if state.debug:
        overrides["debug"] = True

    try:
        settings = get_settings(**overrides)
    except ValidationError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)

    configure_logging(settings)

    if not settings.is_configured:
        console.print("[red]Error:[/red] No GroupMe access token configured.")
        console.print("[dim]Set the GROUPME_TOKEN environment variable or pass --token[/dim]")
        raise typer.Exit(1)

    return settings


def _create_client() -> Tuple[GroupMeClient, GroupMeSettings]:
    settings = _load_settings()
    return GroupMeClient.from_settings(settings, transport=_transport), settings


def _fail(error: GroupMeError) -> NoReturn:
    console.print(f"[red]Error:[/red] {create_user_friendly_message(error)}")
    console.print(f"[dim]{error}[/dim]")
    raise typer.Exit(1)


def _format_time(timestamp: Optional[int]) -> str:
    if timestamp is None:
        return "-"
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M")


@app.command("groups")
def groups_command() -> None:
    """List the groups you are a member of."""
    client, _ = _create_client()
    try:
        with client:
            groups = client.get_groups()
    except GroupMeError as e:
        _fail(e)

    table = Table(title="Groups", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="green")
    table.add_column("Members", justify="right")
    table.add_column("Messages", justify="right")

    for group in groups:
        table.add_row(group.id, group.name, str(len(group.members)), str(group.message_count))

    console.print(table)


@app.command("group")
def group_command(
    group_id: str = typer.Argument(..., help="ID of the group"),
) -> None:
    """Show details of a single group."""
    client, _ = _create_client()
    try:
        with client:
            group = client.get_group(group_id)
    except GroupMeError as e:
        _fail(e)

    members = ", ".join(member.nickname or member.user_id for member in group.members) or "-"
    body = (
        f"[bold]ID:[/bold] {group.id}\n"
        f"[bold]Description:[/bold] {group.description or '-'}\n"
        f"[bold]Created:[/bold] {_format_time(group.created_at)}\n"
        f"[bold]Messages:[/bold] {group.message_count}\n"
        f"[bold]Members ({len(group.members)}):[/bold] {members}"
    )
    console.print(Panel(body, title=group.name or group.id, border_style="blue"))


@app.command("messages")
def messages_command(
    group_id: str = typer.Argument(..., help="ID of the group"),
    after: Optional[str] = typer.Option(None, "--after", "-a", help="Show messages after this message ID"),
    before: Optional[str] = typer.Option(None, "--before", "-b", help="Show messages before this message ID"),
) -> None:
    """Show one page of messages after or before a message."""
    if (after is None) == (before is None):
        console.print("[red]Error:[/red] Give exactly one of --after or --before")
        raise typer.Exit(1)

    client, _ = _create_client()
    try:
        with client:
            if after is not None:
                page = client.get_messages_after(group_id, after)
            else:
                page = client.get_messages_before(group_id, before)
    except GroupMeError as e:
        _fail(e)

    _print_page(page)


def _print_page(page: GroupMessages) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Time", style="dim", no_wrap=True)
    table.add_column("Author", style="green")
    table.add_column("Text")
    table.add_column("Likes", justify="right")

    for message in page.messages:
        table.add_row(
            message.id,
            _format_time(message.created_at),
            Text(message.name),
            Text(message.text or ""),
            str(message.like_count),
        )

    console.print(table)
    if page.is_exhausted:
        console.print("[dim]No more messages in this direction[/dim]")
    else:
        console.print(f"[dim]Next cursor: {page.last.id}[/dim]")


@app.command("export")
def export_command(
    group_id: str = typer.Argument(..., help="ID of the group"),
    output: Path = typer.Argument(..., help="CSV file to write"),
    progress: bool = typer.Option(True, "--progress/--no-progress", help="Show a progress bar"),
) -> None:
    """Export every message of a group to a CSV file."""
    client, settings = _create_client()
    try:
        with client:
            group = client.get_group(group_id)
            bar = _progress_bar(group.message_count, settings) if progress else None
            summary = export_messages(client, group, output, progress=bar)
    except GroupMeError as e:
        _fail(e)
    except OSError as e:
        console.print(f"[red]Error writing {output}:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Exported {summary.messages} messages to {summary.path}")


@app.command("likes")
def likes_command(
    group_id: str = typer.Argument(..., help="ID of the group"),
    output: Path = typer.Argument(..., help="CSV file to write"),
    progress: bool = typer.Option(True, "--progress/--no-progress", help="Show a progress bar"),
) -> None:
    """Export a matrix of who liked whose messages to a CSV file."""
    client, settings = _create_client()
    try:
        with client:
            group = client.get_group(group_id)
            bar = _progress_bar(group.message_count, settings) if progress else None
            summary = export_like_matrix(
                client, group, output, progress=bar, empty_value=settings.csv_empty_value
            )
    except GroupMeError as e:
        _fail(e)
    except OSError as e:
        console.print(f"[red]Error writing {output}:[/red] {e}")
        raise typer.Exit(1)

    console.print(
        f"[green]✓[/green] Counted likes on {summary.messages} messages "
        f"from {summary.rows} authors into {summary.path}"
    )


def _progress_bar(total: int, settings: GroupMeSettings) -> ProgressBar:
    return ProgressBar(total, output=sys.stderr, line_width=settings.progress_width)


@app.command("like")
def like_command(
    group_id: str = typer.Argument(..., help="ID of the group"),
    message_id: str = typer.Argument(..., help="ID of the message"),
) -> None:
    """Like a message."""
    _send_like(group_id, message_id, like=True)


@app.command("unlike")
def unlike_command(
    group_id: str = typer.Argument(..., help="ID of the group"),
    message_id: str = typer.Argument(..., help="ID of the message"),
) -> None:
    """Remove your like from a message."""
    _send_like(group_id, message_id, like=False)


def _send_like(group_id: str, message_id: str, like: bool) -> None:
    action = "Liked" if like else "Unliked"
    client, _ = _create_client()
    try:
        with client:
            if like:
                result = client.like_message(group_id, message_id)
            else:
                result = client.unlike_message(group_id, message_id)
    except GroupMeError as e:
        _fail(e)

    if not result:
        console.print(f"[red]Error:[/red] No response from GroupMe for message {message_id}")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] {action} message {message_id}")
    if not result.status_ok:
        console.print(f"[yellow]Warning:[/yellow] server answered with status {result.status_code}")


def main() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    main()
