"""CLI interface for contentdesk."""

import json
import logging
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.rule import Rule

from contentdesk.config import ContentDeskConfig, load_config, merge_cli_overrides
from contentdesk.content.models import CHANNELS, Channel
from contentdesk.content.renderer import to_rich
from contentdesk.content.session import EditSession
from contentdesk.errors import APIError, MissingRecordError, ReadOnlyChannelError, SaveFailure
from contentdesk.integrations.api import ContentAPIClient

app = typer.Typer(
    name="contentdesk",
    help="Review, copy and edit generated social content.",
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from contentdesk import __version__

        console.print(f"contentdesk {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .contentdesk.toml file."),
    ] = None,
    api_url: Annotated[
        Optional[str],
        typer.Option("--api-url", help="Backend base URL (overrides config)."),
    ] = None,
    token: Annotated[
        Optional[str],
        typer.Option("--token", help="Bearer token (overrides the session file)."),
    ] = None,
    token_file: Annotated[
        Optional[str],
        typer.Option("--token-file", help="Session file holding the login token."),
    ] = None,
    timeout: Annotated[
        Optional[int],
        typer.Option("--timeout", help="Request timeout in seconds."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """contentdesk - normalize and edit generated content records."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )
    config = load_config(config_path)
    ctx.obj = merge_cli_overrides(
        config, api_url=api_url, token=token, token_file=token_file, timeout=timeout
    )


class _EchoClipboard:
    def write(self, text: str) -> None:
        typer.echo(text)


class _FileClipboard:
    def __init__(self, path: Path) -> None:
        self.path = path

    def write(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(text, encoding="utf-8")


RecordArg = Annotated[
    Optional[Path],
    typer.Argument(help="JSON file holding a raw content record.", dir_okay=False),
]
ContentIdOpt = Annotated[
    Optional[str],
    typer.Option("--id", help="Fetch the record from the backend instead of a file."),
]


def _channel(name: str) -> Channel:
    try:
        return Channel(name)
    except ValueError:
        choices = ", ".join(c.value for c in Channel)
        err_console.print(f"[red]Error:[/red] Unknown channel {name!r}. Choose from: {choices}")
        raise typer.Exit(1)


def _read_record(record: Path | None, content_id: str | None, config: ContentDeskConfig) -> Any:
    """Load a raw record from a file or the backend; None if neither is given."""
    if record is not None:
        if not record.exists():
            return None
        try:
            return json.loads(record.read_text(encoding="utf-8") or "null")
        except json.JSONDecodeError as exc:
            err_console.print(f"[red]Error:[/red] {record} is not valid JSON: {exc}")
            raise typer.Exit(1)
    if content_id is not None:
        client = ContentAPIClient(config.to_api_config())
        try:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=err_console,
            ) as progress:
                progress.add_task("Fetching content...", total=None)
                return client.get_content(content_id)
        except APIError as exc:
            err_console.print(f"[red]Error:[/red] Failed to load content: {exc}")
            raise typer.Exit(1)
    return None


def _open_session(ctx: typer.Context, record: Path | None, content_id: str | None) -> EditSession:
    config: ContentDeskConfig = ctx.obj
    raw = _read_record(record, content_id, config)
    try:
        return EditSession.open(raw, config)
    except MissingRecordError:
        err_console.print("[yellow]No content found.[/yellow] Pass a record file or --id.")
        raise typer.Exit(1)


@app.command()
def show(
    ctx: typer.Context,
    record: RecordArg = None,
    content_id: ContentIdOpt = None,
    channel: Annotated[
        Optional[str],
        typer.Option("--channel", help="Only show this channel."),
    ] = None,
) -> None:
    """Render a content record's channels."""
    session = _open_session(ctx, record, content_id)
    model = session.model

    trend = escape(model.trend or "Untitled trend")
    console.print(f"[bold]{trend}[/bold]  ({escape(model.brand_label)})")
    generated = model.generated_date
    if generated is not None:
        console.print(f"[dim]Generated: {generated.date().isoformat()}[/dim]")

    channels = [_channel(channel)] if channel else list(CHANNELS)
    for ch in channels:
        spec = CHANNELS[ch]
        console.print(Rule(spec.label, align="left"))
        console.print(to_rich(session.render(ch)))
        if spec.char_limit is not None:
            style = "red" if session.over_limit(ch) else "dim"
            console.print(
                f"[{style}]{session.char_count(ch)}/{spec.char_limit} characters[/{style}]"
            )


@app.command()
def copy(
    ctx: typer.Context,
    channel: Annotated[str, typer.Option("--channel", help="Channel to copy.")],
    record: RecordArg = None,
    content_id: ContentIdOpt = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write to this file instead of stdout."),
    ] = None,
) -> None:
    """Copy a channel's current value as human-readable text."""
    ch = _channel(channel)
    session = _open_session(ctx, record, content_id)
    clipboard = _FileClipboard(output) if output else _EchoClipboard()
    session.copy(ch, clipboard)
    if session.is_copied(ch):
        err_console.print("[green]Copied![/green]")


@app.command()
def edit(
    ctx: typer.Context,
    channel: Annotated[str, typer.Option("--channel", help="Channel to edit.")],
    text: Annotated[str, typer.Option("--text", help="New flat text for the channel.")],
    record: RecordArg = None,
    content_id: ContentIdOpt = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Print the update payload instead of saving."),
    ] = False,
) -> None:
    """Replace a channel's text and save the record.

    Editing a structured channel saves it as flat text.  The script
    channels are copy-only.
    """
    ch = _channel(channel)
    session = _open_session(ctx, record, content_id)
    try:
        session.edit(ch, text)
    except ReadOnlyChannelError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)

    if session.over_limit(ch):
        limit = CHANNELS[ch].char_limit
        err_console.print(
            f"[yellow]Warning:[/yellow] {session.char_count(ch)}/{limit} characters"
        )

    if dry_run:
        typer.echo(json.dumps(session.update_request(), indent=2, ensure_ascii=False))
        return

    config: ContentDeskConfig = ctx.obj
    client = ContentAPIClient(config.to_api_config())
    try:
        session.save(client)
    except SaveFailure as exc:
        err_console.print(f"[red]Failed to save:[/red] {exc.cause or exc}")
        raise typer.Exit(1)
    console.print(f"[green]Saved content {session.model.id}[/green]")


if __name__ == "__main__":
    app()
