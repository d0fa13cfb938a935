"""Entry commands for the babylog CLI.

Handles importing raw documents, migrating and validating them, and
rendering daily stats.
"""

import json
from datetime import date
from pathlib import Path
from typing import Any, Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()

CONFIG_DIR = Path(".config") / "babylog"


def _get_config() -> dict:
    """Load ~/.config/babylog/config.toml.

    Returns:
        Config dict, empty if no config file exists.
    """
    import toml

    config_path = Path.home() / CONFIG_DIR / "config.toml"

    if not config_path.exists():
        return {}

    try:
        return toml.load(config_path)
    except toml.TomlDecodeError as e:
        console.print(f"[yellow]Ignoring invalid config {config_path}: {e}[/yellow]")
        return {}


def _get_entry_store(config: dict):
    """Get the entry store instance."""
    from babylog.db.store import EntryStore

    configured = config.get("store", {}).get("path")
    if configured:
        db_path = Path(configured).expanduser()
    else:
        db_path = Path.home() / CONFIG_DIR / "babylog.db"
    return EntryStore(db_path)


def _fail(message: str) -> None:
    console.print(Panel(
        f"[red]{message}[/red]",
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def load_documents(path: Path) -> list[dict[str, Any]]:
    """Read raw documents from a JSON file.

    The file holds either a list of documents or an object with an
    ``entries`` list.

    Raises:
        ValueError: If the file is not JSON or has no document list.
    """
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ValueError(f"{path} is not valid JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get("entries")
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list of entry documents")
    return data


def _read_documents(path: Path) -> list[dict[str, Any]]:
    try:
        return load_documents(path)
    except ValueError as e:
        _fail(str(e))


@click.command(name="import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def import_entries(file: Path) -> None:
    """Load raw entry documents from a JSON file into the store.

    Documents are stored as-is; they are migrated when read.

    \b
    Examples:
      babylog import export.json
    """
    docs = _read_documents(file)
    store = _get_entry_store(_get_config())

    try:
        count = store.put_entries(docs)
    except ValueError as e:
        _fail(str(e))

    console.print(f"[green]Imported {count} documents into {store.db_path}[/green]")


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def migrate(file: Path) -> None:
    """Print the documents in FILE upgraded to the current schema."""
    from babylog.migrations import default_engine

    docs = _read_documents(file)
    migrated = default_engine().migrate_all(docs)
    click.echo(json.dumps(migrated, indent=2, default=str))


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate(file: Path) -> None:
    """Migrate and validate FILE, listing documents that fail.

    \b
    Examples:
      babylog validate export.json
    """
    from babylog.pipeline import process_snapshot

    result = process_snapshot(_read_documents(file))

    if result.rejections:
        table = Table(
            title="Rejected Documents",
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("ID", style="bold")
        table.add_column("Reason", style="red")
        for rejection in result.rejections:
            table.add_row(rejection.doc_id or "-", rejection.reason)
        console.print(table)

    console.print(f"\n[bold]Accepted:[/bold] {len(result.entries)}")
    console.print(f"[bold]Rejected:[/bold] {len(result.rejections)}")


@click.command()
@click.argument(
    "file", required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "--days",
    type=click.Choice(["7", "30", "90"]),
    default=None,
    help="Window length in days (default from config, else 7).",
)
@click.option("--tz", default=None, help="Timezone for day boundaries (default from config, else UTC).")
@click.option("--baby", "baby_id", default=None, help="Only this child's entries.")
@click.option(
    "--today",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Last day of the window (YYYY-MM-DD).",
)
def stats(
    file: Optional[Path],
    days: Optional[str],
    tz: Optional[str],
    baby_id: Optional[str],
    today,
) -> None:
    """Show daily feeding, sleep, pumping and diaper stats.

    Reads FILE if given, otherwise the entry store.

    \b
    Examples:
      babylog stats                        # Last 7 days from the store
      babylog stats export.json --days 30  # Last 30 days from a file
      babylog stats --tz America/New_York
    """
    from babylog.pipeline import StatsPipeline
    from babylog.stats import format_minutes

    config = _get_config()
    stats_config = config.get("stats", {})
    try:
        window = int(days or stats_config.get("days", 7))
    except (TypeError, ValueError):
        _fail(f"Invalid stats.days in config: {stats_config.get('days')!r}")
    zone = tz or stats_config.get("timezone", "UTC")
    last_day: Optional[date] = today.date() if today else None

    if file is not None:
        docs = _read_documents(file)
        if baby_id:
            docs = [d for d in docs if isinstance(d, dict) and d.get("babyId") == baby_id]
    else:
        docs = _get_entry_store(config).list_entries(baby_id)

    try:
        result = StatsPipeline(days=window, tz=zone).update(docs, today=last_day)
    except ValueError as e:
        _fail(str(e))

    report = result.report

    summary = (
        f"[bold]Feeds:[/bold] {report.feeding.total_feeds} "
        f"({report.feeding.avg_feeds_per_day:.1f}/day)\n"
        f"[bold]Bottle:[/bold] {report.feeding.total_bottle_oz:.1f} oz\n"
        f"[bold]Nursing:[/bold] {format_minutes(report.feeding.total_nursing_mins)} "
        f"(L {format_minutes(report.feeding.nursing_breakdown.left_mins)} / "
        f"R {format_minutes(report.feeding.nursing_breakdown.right_mins)})\n"
        f"[bold]Sleep:[/bold] {format_minutes(report.sleep.total_sleep_mins)} "
        f"(avg {format_minutes(report.sleep.avg_sleep_per_day_mins)}/day, "
        f"longest {format_minutes(report.sleep.longest_sleep_mins)})\n"
        f"[bold]Pumped:[/bold] {report.pump.total_pumped_oz:.1f} oz "
        f"({report.pump.avg_pumped_per_day_oz:.1f} oz/day)\n"
        f"[bold]Diapers:[/bold] {report.diaper.total_changes} "
        f"({report.diaper.avg_changes_per_day:.1f}/day)"
    )
    console.print(Panel(
        summary,
        title=f"[bold]Last {report.window_days} days ({report.timezone})[/bold]",
        border_style="cyan",
    ))

    table = Table(
        title="Daily Totals",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Date", style="dim")
    table.add_column("Feeds", justify="right")
    table.add_column("Bottle oz", justify="right")
    table.add_column("Nursing", justify="right")
    table.add_column("Sleep", justify="right")
    table.add_column("Pumped oz", justify="right")
    table.add_column("Pee/Poop/Both", justify="center")

    for day in report.days:
        table.add_row(
            day.date,
            str(day.feed_count),
            f"{day.bottle_oz:.1f}",
            format_minutes(day.nursing_minutes),
            format_minutes(day.sleep_minutes),
            f"{day.pumped_oz:.1f}",
            f"{day.pee}/{day.poop}/{day.both}",
        )

    console.print(table)

    if result.rejections:
        console.print(
            f"\n[yellow]{len(result.rejections)} documents were rejected; "
            f"run [cyan]babylog validate[/cyan] for details.[/yellow]"
        )
