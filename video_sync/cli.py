"""CLI for the channel sync service."""

from pathlib import Path

import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from video_sync.channel.schemas import SyncResult
from video_sync.core.config import Settings, get_settings_with_yaml
from video_sync.core.constants import SyncStatus
from video_sync.core.logging_config import setup_logging

app = typer.Typer(help="Video Sync - keep a local feed of a YouTube channel's uploads")
console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    log_level: str | None = typer.Option(None, "--log-level", help="Override LOG_LEVEL"),
):
    """Load settings and configure logging for every command."""
    settings = get_settings_with_yaml(config)
    if log_level:
        settings.log_level = log_level
    setup_logging(settings.log_level, settings.log_file)
    ctx.obj = settings


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj  # type: ignore[no-any-return]


@app.command("sync-once")
def sync_once(ctx: typer.Context):
    """Run a single sync cycle and exit."""
    from video_sync.service import create_sync_service

    try:
        service = create_sync_service(_settings(ctx))
        if service.scheduler is None:
            rprint("[red]✗ YouTube sync is not configured (YOUTUBE_API_KEY, YOUTUBE_CHANNEL_ID)[/red]")
            raise typer.Exit(1)

        rprint("\n[bold blue]Syncing channel uploads...[/bold blue]\n")
        result = service.scheduler.run_cycle()

        if not service.scheduler.enabled:
            rprint(f"[red]✗ Sync disabled: {escape(service.scheduler.disabled_reason or '')}[/red]")
            raise typer.Exit(1)
        if result is None:
            rprint("[red]✗ Could not resolve the channel's uploads playlist[/red]")
            raise typer.Exit(1)

        _display_result(result)

        if result.status in (
            SyncStatus.LOAD_FAILED,
            SyncStatus.FETCH_FAILED,
            SyncStatus.PERSIST_FAILED,
        ):
            raise typer.Exit(1)

    except typer.Exit:
        raise
    except Exception as e:
        rprint(f"[red]✗ Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e


def _display_result(result: SyncResult):
    """Display sync cycle summary."""
    style = "green" if result.status in (SyncStatus.UPDATED, SyncStatus.SEEDED) else "yellow"
    if result.error:
        style = "red"

    summary_table = Table(show_header=False, box=None)
    summary_table.add_column("Field", style="cyan", width=16)
    summary_table.add_column("Value", style="white")

    summary_table.add_row("Playlist", result.feed_id)
    summary_table.add_row("Status", f"[{style}]{result.status}[/{style}]")
    summary_table.add_row("Fetched", str(result.items_fetched))
    summary_table.add_row("New", str(result.items_new))
    summary_table.add_row("Notified", "✓" if result.notified else "✗")
    summary_table.add_row("Last seen", result.last_seen_id or "N/A")
    if result.error:
        summary_table.add_row("Error", escape(result.error))

    console.print(summary_table)


@app.command()
def run(ctx: typer.Context):
    """Poll the channel now and then every SYNC_INTERVAL_SECONDS until interrupted."""
    from video_sync.service import create_sync_service

    try:
        service = create_sync_service(_settings(ctx))
        if service.scheduler is None:
            rprint("[red]✗ YouTube sync is not configured (YOUTUBE_API_KEY, YOUTUBE_CHANNEL_ID)[/red]")
            raise typer.Exit(1)

        service.scheduler.run_forever()

        if not service.scheduler.enabled:
            raise typer.Exit(1)

    except typer.Exit:
        raise
    except Exception as e:
        rprint(f"[red]✗ Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e


@app.command()
def posts(
    ctx: typer.Context,
    limit: int = typer.Option(20, "-l", "--limit", help="Maximum posts to show"),
):
    """List synced posts, newest first."""
    from video_sync.database import JsonStateStore, PostsReader

    settings = _settings(ctx)
    items = PostsReader(JsonStateStore(settings.state_file)).list_posts()

    if not items:
        rprint("\n[yellow]No posts synced yet.[/yellow]\n")
        return

    rprint(f"\n[bold blue]📹 Synced posts ({settings.state_file})[/bold blue]\n")

    table = Table()
    table.add_column("Published", style="dim", width=12)
    table.add_column("Title", style="white", width=60)
    table.add_column("URL", style="cyan")

    for item in items[:limit]:
        title = item.title or "Untitled"
        if len(title) > 58:
            title = title[:55] + "..."
        published = item.published_at.date().isoformat() if item.published_at else "N/A"
        table.add_row(published, escape(title), item.source_url)

    console.print(table)
    rprint(f"\n[green]Showing {min(limit, len(items))} of {len(items)} post(s)[/green]\n")


@app.command()
def resolve(
    ctx: typer.Context,
    channel_id: str | None = typer.Argument(None, help="Channel ID (defaults to YOUTUBE_CHANNEL_ID)"),
):
    """Print the uploads playlist ID of a channel."""
    from video_sync.channel import YouTubeFeedClient

    settings = _settings(ctx)
    try:
        client = YouTubeFeedClient(
            settings.youtube_api_key,
            base_url=settings.youtube_api_base_url,
            timeout=settings.youtube_api_timeout,
        )
        feed_id = client.resolve_feed_id(channel_id or settings.youtube_channel_id)
        rprint(f"[green]✓ Uploads playlist: {feed_id}[/green]")
    except Exception as e:
        rprint(f"[red]✗ Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e


@app.command()
def serve(
    ctx: typer.Context,
    host: str | None = typer.Option(None, help="Bind address (defaults to API_HOST)"),
    port: int | None = typer.Option(None, help="Port (defaults to API_PORT)"),
):
    """Serve the read API with the background sync running."""
    import uvicorn

    from video_sync.api.app import create_app
    from video_sync.service import create_sync_service

    settings = _settings(ctx)
    service = create_sync_service(settings)
    uvicorn.run(
        create_app(service),
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    app()
