"""CLI entry point for feedstore.

Commands chain, and all of them act on one in-process store that starts
empty:

    feedstore load feeds.json update save feeds.json

Nothing is saved unless ``save`` is part of the chain. The first failing
command stops the chain with exit code 1.
"""

import json
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from feedstore.config.logging import setup_logging
from feedstore.config.manager import ConfigManager
from feedstore.config.schema import GlobalConfig
from feedstore.feeds.fetcher import FeedFetcher
from feedstore.store import codec
from feedstore.store.store import FeedStore
from feedstore.utils.display import truncate_text, truncate_url
from feedstore.utils.errors import FeedNotFoundError, FeedStoreError

app = typer.Typer(
    name="feedstore",
    help="Keep a local store of RSS and Atom feeds",
    no_args_is_help=True,
    chain=True,
)
console = Console()


@dataclass
class Session:
    """State shared by the commands of one invocation."""

    store: FeedStore
    config: GlobalConfig
    config_manager: ConfigManager


@contextmanager
def report_errors() -> Iterator[None]:
    """Report any feedstore error and exit with status 1."""
    try:
        yield
    except FeedStoreError as e:
        console.print(f"[red]✗[/red] Error: {escape(str(e))}")
        raise typer.Exit(code=1) from e


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose (DEBUG) logging"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write logs to file"
    ),
    config_dir: Path | None = typer.Option(
        None, "--config-dir", help="Use a custom config directory"
    ),
) -> None:
    """feedstore - fetch, store and refresh syndication feeds."""
    manager = ConfigManager(config_dir=config_dir)
    with report_errors():
        config = manager.load_config()
        setup_logging(verbose=verbose, log_file=log_file, level=config.log_level)

    fetcher = FeedFetcher.from_config(config.fetch)
    ctx.call_on_close(fetcher.close)
    ctx.obj = Session(
        store=FeedStore(fetcher=fetcher),
        config=config,
        config_manager=manager,
    )


@app.command("version")
def show_version() -> None:
    """Show version information."""
    from feedstore import __version__

    console.print(f"[bold cyan]feedstore[/bold cyan] v{__version__}")


@app.command("load")
def load_store(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Feed database to load"),
) -> None:
    """Replace the in-process store with the contents of a database file."""
    session: Session = ctx.obj
    with report_errors():
        session.store = codec.load(path, fetcher=session.store.fetcher)
    console.print(
        f"[green]✓[/green] Loaded {len(session.store)} feed(s) from {escape(str(path))}"
    )


@app.command("save")
def save_store(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Feed database to write"),
) -> None:
    """Write the store to a database file, overwriting it."""
    session: Session = ctx.obj
    with report_errors():
        codec.save(path, session.store)
    console.print(
        f"[green]✓[/green] Saved {len(session.store)} feed(s) to {escape(str(path))}"
    )


@app.command("add-channel")
def add_channel(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="RSS or Atom feed URL"),
) -> None:
    """Fetch a feed and add it under its URL.

    Examples:
        feedstore add-channel https://blog.apnic.net/feed/ save feeds.json
    """
    session: Session = ctx.obj
    with report_errors():
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task(f"Fetching {url}...", total=None)
            session.store.add(url)
    console.print(f"[green]✓[/green] Feed '[bold]{escape(url)}[/bold]' added")


@app.command("add-from-file")
def add_from_file(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Local RSS or Atom document"),
) -> None:
    """Add a feed from a local file, keyed by its atom:link self-link."""
    session: Session = ctx.obj
    with report_errors():
        url = session.store.add_from_file(path)
    console.print(f"[green]✓[/green] Feed '[bold]{escape(url)}[/bold]' added from {escape(str(path))}")


@app.command("remove-channel")
def remove_channel(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="URL of the feed to remove"),
) -> None:
    """Remove a feed from the store."""
    session: Session = ctx.obj
    with report_errors():
        session.store.remove(url)
    console.print(f"[green]✓[/green] Feed '[bold]{escape(url)}[/bold]' removed")


@app.command("get-channel")
def get_channel(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="URL of the feed to show"),
    xml: bool = typer.Option(False, "--xml", help="Print the stored XML document"),
) -> None:
    """Show a stored feed."""
    session: Session = ctx.obj
    with report_errors():
        channel = session.store.get(url)
        if channel is None:
            raise FeedNotFoundError(f"Feed '{url}' not found")

    if xml:
        typer.echo(channel.to_xml())
        return

    summary = channel.summary()
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("URL", escape(url))
    table.add_row("Format", summary.kind.upper())
    table.add_row("Title", escape(summary.title or "—"))
    table.add_row("Link", escape(summary.link or "—"))
    table.add_row("Description", escape(truncate_text(summary.description or "—", 80)))
    table.add_row("Items", str(summary.item_count))
    console.print(table)


@app.command("update-channel")
def update_channel(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Feed URL to fetch and store"),
) -> None:
    """Fetch a feed and insert or replace it."""
    session: Session = ctx.obj
    with report_errors():
        session.store.update_one(url)
    console.print(f"[green]✓[/green] Feed '[bold]{escape(url)}[/bold]' updated")


@app.command("update")
def update_all(
    ctx: typer.Context,
    keep_going: bool = typer.Option(
        False, "--keep-going", "-k", help="Refresh remaining feeds after a failure"
    ),
) -> None:
    """Refresh every stored feed.

    By default the first failure stops the refresh. With --keep-going every
    feed is attempted and failures are listed at the end.
    """
    session: Session = ctx.obj
    with report_errors():
        result = session.store.update_all(keep_going=keep_going)

    console.print(f"[green]✓[/green] Updated {len(result.updated)} feed(s)")
    if not result.ok:
        for url, error in result.failed.items():
            console.print(f"[red]✗[/red] {escape(url)}: {escape(str(error))}")
        console.print(f"[red]{len(result.failed)} feed(s) failed to update[/red]")
        raise typer.Exit(code=1)


@app.command("list-channels")
def list_channels(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List every stored feed."""
    session: Session = ctx.obj
    store = session.store

    if json_output:
        feeds = [
            {"url": url, **store.get(url).summary().model_dump()}
            for url in store.urls()
        ]
        print(json.dumps({"feeds": feeds, "total": len(feeds)}, indent=2))
        return

    if not len(store):
        console.print("[yellow]No feeds in the store.[/yellow]")
        console.print("\nAdd a feed: [cyan]feedstore add-channel <url>[/cyan]")
        return

    table = Table(title="[bold]Stored Feeds[/bold]")
    table.add_column("URL", style="blue")
    table.add_column("Title", style="cyan")
    table.add_column("Format", justify="center", style="yellow")
    table.add_column("Items", justify="right", style="green")

    for url in store.urls():
        summary = store.get(url).summary()
        table.add_row(
            escape(truncate_url(url, max_length=50)),
            escape(truncate_text(summary.title or "—", 40)),
            summary.kind.upper(),
            str(summary.item_count),
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(store)} feed(s)[/dim]")


@app.command("show-config")
def show_config(ctx: typer.Context) -> None:
    """Display the current configuration."""
    session: Session = ctx.obj
    config = session.config

    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Config file", str(session.config_manager.config_file))
    table.add_row("Log level", config.log_level)
    table.add_row("Fetch timeout", f"{config.fetch.timeout_seconds:g}s")
    table.add_row("Fetch attempts", str(config.fetch.max_attempts))
    table.add_row("User-Agent", escape(config.fetch.user_agent))

    console.print("\n[bold]feedstore Configuration[/bold]\n")
    console.print(table)


if __name__ == "__main__":
    app()
