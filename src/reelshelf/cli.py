"""Command-line interface for Reelshelf."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .app import Reelshelf
from .catalog.models import Episode, Series
from .catalog.plex import PlexCatalog
from .config import ReelshelfConfig, create_sample_config, load_config
from .error_handling import (
    ConfigurationError,
    DependencyError,
    ErrorCategory,
    ReelshelfError,
    check_dependencies,
    graceful_exit,
    with_error_handling,
)
from .jobs.commands import ConvertEpisodeCommand
from .logs import list_log_files
from .rootfolders.models import RootFolder

console = Console()


def setup_logging(
    *,
    verbose: bool = False,
    config: ReelshelfConfig | None = None,
) -> None:
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO

    cleanup_logging()

    show_path = level == logging.DEBUG
    handlers: list[logging.Handler] = [
        RichHandler(console=console, rich_tracebacks=True, show_path=show_path),
    ]

    if config and config.log_dir:
        config.log_dir.mkdir(parents=True, exist_ok=True)
        log_file = config.log_dir / "reelshelf.log"
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            ),
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )


def cleanup_logging() -> None:
    """Clean up logging handlers to prevent ResourceWarnings."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        if isinstance(handler, logging.FileHandler):
            handler.close()
            root_logger.removeHandler(handler)


def get_app(ctx: click.Context) -> Reelshelf:
    """Build services lazily so config-only commands never touch the database."""
    if "app" not in ctx.obj:
        ctx.obj["app"] = Reelshelf(ctx.obj["config"])
    return ctx.obj["app"]


def exit_with_error(error: ReelshelfError) -> None:
    error.display_to_user()
    graceful_exit(1)


def format_file_size(size_bytes: int) -> str:
    """Format file size in human readable format."""
    size = float(size_bytes)
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0
    return f"{size:.1f} PB"


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Configuration file path",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, config: Path | None, verbose: bool) -> None:
    """Reelshelf - TV library folders and episode conversion."""
    try:
        ctx.ensure_object(dict)
        loaded_config = load_config(config)
        ctx.obj["config"] = loaded_config
        ctx.obj["verbose"] = verbose

        setup_logging(verbose=verbose, config=loaded_config)
    except (OSError, ValueError, RuntimeError) as e:
        config_error = ConfigurationError(
            f"Failed to load configuration: {e}",
            config_path=config,
            solution="Run 'reelshelf config init' to create a fresh configuration file",
        )
        console.print(f"[red]Configuration Error:[/red] {config_error}")
        sys.exit(1)


@cli.group("config")
def config_cmd() -> None:
    """Configuration management commands."""


@config_cmd.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show current configuration."""
    config: ReelshelfConfig = ctx.obj["config"]

    table = Table()
    table.add_column("Setting")
    table.add_column("Value")

    table.add_row("Data Directory", str(config.data_dir))
    table.add_row("Log Directory", str(config.log_dir))
    table.add_row("Conversion Directory", str(config.conversion_dir))
    table.add_row("HandBrake", f"{config.handbrake_binary} ({config.handbrake_preset})")
    table.add_row("AtomicParsley", config.atomicparsley_binary)
    table.add_row("Stop On Conversion Failure", str(config.stop_on_conversion_failure))
    table.add_row("Catalog", config.catalog_source)
    table.add_row("Plex URL", config.plex_url or "Not configured")

    console.print(table)


@config_cmd.command("init")
@click.option(
    "--path",
    "-p",
    type=click.Path(path_type=Path),
    default=Path.home() / ".config" / "reelshelf" / "config.toml",
    help="Configuration file path",
)
def config_init(path: Path) -> None:
    """Create a sample configuration file."""
    if path.exists():
        console.print(f"[yellow]Configuration already exists at {path}[/yellow]")
        return
    create_sample_config(path)
    console.print(f"[green]Created sample configuration at {path}[/green]")


@cli.command("check")
@click.pass_context
def check(ctx: click.Context) -> None:
    """Check that the conversion tools run and the catalog is reachable."""
    config: ReelshelfConfig = ctx.obj["config"]
    missing = check_dependencies(config.handbrake_binary, config.atomicparsley_binary)
    if missing:
        for error in missing:
            error.display_to_user()
        graceful_exit(1)
        return

    app = get_app(ctx)
    if not app.handbrake.check_availability():
        exit_with_error(
            DependencyError(
                "HandBrakeCLI",
                details=f"'{config.handbrake_binary} --version' did not succeed",
            ),
        )
        return

    console.print(f"[green]✓[/green] {app.handbrake.get_version()}")
    console.print(
        f"[green]✓[/green] {app.atomic_parsley.get_version() or 'AtomicParsley'}",
    )

    if isinstance(app.catalog, PlexCatalog):
        if app.catalog.verify_connection():
            console.print("[green]✓[/green] Plex server reachable")
        else:
            console.print("[yellow]Plex server unreachable, no folders will be claimed[/yellow]")


@cli.group("rootfolder")
def rootfolder() -> None:
    """Manage library root folders."""


@rootfolder.command("list")
@click.pass_context
def rootfolder_list(ctx: click.Context) -> None:
    """List root folders with free space and unmapped folder counts."""
    folders = get_app(ctx).root_folders.all()
    if not folders:
        console.print("[yellow]No root folders configured[/yellow]")
        return

    table = Table(title="Root Folders")
    table.add_column("ID", justify="right")
    table.add_column("Path")
    table.add_column("Free Space", justify="right")
    table.add_column("Unmapped", justify="right")

    for folder in folders:
        table.add_row(
            str(folder.id),
            folder.path,
            format_file_size(folder.free_space),
            str(len(folder.unmapped_folders)),
        )

    console.print(table)


@rootfolder.command("add")
@click.argument("path")
@click.pass_context
def rootfolder_add(ctx: click.Context, path: str) -> None:
    """Register PATH as a root folder."""
    try:
        folder = get_app(ctx).root_folders.add(RootFolder(path=path))
    except ReelshelfError as e:
        exit_with_error(e)
        return

    console.print(f"[green]Added root folder {folder.id}: {folder.path}[/green]")
    console.print(
        f"Free space: {format_file_size(folder.free_space)}, "
        f"unmapped folders: {len(folder.unmapped_folders)}",
    )


@rootfolder.command("remove")
@click.argument("root_folder_id", type=int)
@click.pass_context
def rootfolder_remove(ctx: click.Context, root_folder_id: int) -> None:
    """Remove root folder ROOT_FOLDER_ID from the registry."""
    get_app(ctx).root_folders.remove(root_folder_id)
    console.print(f"Removed root folder {root_folder_id}")


@rootfolder.command("unmapped")
@click.argument("path")
@click.pass_context
def rootfolder_unmapped(ctx: click.Context, path: str) -> None:
    """List subfolders of PATH that no series claims."""
    try:
        unmapped = get_app(ctx).root_folders.get_unmapped_folders(path)
    except ReelshelfError as e:
        exit_with_error(e)
        return

    if not unmapped:
        console.print("No unmapped folders")
        return

    table = Table(title=f"Unmapped folders in {path}")
    table.add_column("Name")
    table.add_column("Path")
    for folder in unmapped:
        table.add_row(folder.name, folder.path)
    console.print(table)


@rootfolder.command("freespace")
@click.pass_context
def rootfolder_freespace(ctx: click.Context) -> None:
    """Show free space for each drive holding a root folder."""
    free_space = get_app(ctx).root_folders.free_space_on_drives()
    if not free_space:
        console.print("[yellow]No drive information available[/yellow]")
        return

    table = Table(title="Free Space")
    table.add_column("Drive")
    table.add_column("Free", justify="right")
    for drive, free in free_space.items():
        table.add_row(drive, format_file_size(free))
    console.print(table)


@cli.group("series")
def series_cmd() -> None:
    """Manage the local series catalog."""


@series_cmd.command("add")
@click.argument("title")
@click.argument("path")
@click.pass_context
def series_add(ctx: click.Context, title: str, path: str) -> None:
    """Add series TITLE stored in PATH."""
    series = get_app(ctx).catalog_store.add_series(Series(title=title, path=path))
    console.print(f"[green]Added series {series.id}: {series.title}[/green]")


@series_cmd.command("list")
@click.pass_context
def series_list(ctx: click.Context) -> None:
    """List series in the local catalog."""
    table = Table(title="Series")
    table.add_column("ID", justify="right")
    table.add_column("Title")
    table.add_column("Path")
    for series in get_app(ctx).catalog_store.all_series():
        table.add_row(str(series.id), series.title, series.path)
    console.print(table)


@cli.group("episode")
def episode_cmd() -> None:
    """Manage episodes in the local catalog."""


@episode_cmd.command("add")
@click.argument("series_id", type=int)
@click.argument("season", type=int)
@click.argument("episode", type=int)
@click.argument("path", type=click.Path(path_type=Path))
@click.option("--title", "-t", default="", help="Episode title")
@click.pass_context
def episode_add(
    ctx: click.Context,
    series_id: int,
    season: int,
    episode: int,
    path: Path,
    title: str,
) -> None:
    """Add an episode file to series SERIES_ID."""
    added = get_app(ctx).catalog_store.add_episode(
        Episode(
            series_id=series_id,
            season_number=season,
            episode_number=episode,
            title=title,
            path=str(path.expanduser().resolve()),
        ),
    )
    console.print(f"[green]Added episode {added.id}[/green]")


@cli.command("convert")
@click.argument("episode_id", type=int)
@click.pass_context
def convert(ctx: click.Context, episode_id: int) -> None:
    """Convert episode EPISODE_ID with HandBrake and tag it."""
    app = get_app(ctx)
    run = with_error_handling(ErrorCategory.EXTERNAL_TOOL)(app.job_runner.execute)

    try:
        notification = run(ConvertEpisodeCommand(target_id=episode_id))
    except ReelshelfError as e:
        exit_with_error(e)
        return

    for message in notification.history:
        console.print(f"  {message}")

    if notification.failed:
        console.print("[yellow]HandBrake reported a failure; check the log for details[/yellow]")

    console.print(f"[bold]{notification.current_message}[/bold]")


@cli.command("logs")
@click.pass_context
def logs(ctx: click.Context) -> None:
    """List log files."""
    config: ReelshelfConfig = ctx.obj["config"]
    log_files = list_log_files(config.log_dir)
    if not log_files:
        console.print("[yellow]No log files found[/yellow]")
        return

    table = Table(title="Log Files")
    table.add_column("File")
    table.add_column("Last Written")
    table.add_column("Download")
    for log_file in log_files:
        table.add_row(
            log_file.filename,
            log_file.last_write_time.strftime("%Y-%m-%d %H:%M:%S"),
            log_file.download_url,
        )
    console.print(table)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
