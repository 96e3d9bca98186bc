"""CLI commands for the reading tracker.

Commands:
- serve: Run the Web API with uvicorn
- seed-books: Replace the book catalog from a JSON/YAML file
- users: List registered students
- leaderboard: Show students ranked by pages read
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from readtrack.config.app_config import load_app_config
from readtrack.core.catalog import CatalogError, seed_catalog
from readtrack.core.leaderboard import rank_students, total_pages_read
from readtrack.core.record_store import RecordStore
from readtrack.core.storage import JsonFileStorage, StorageUnavailable

app = typer.Typer(
    name="readtrack",
    help="Reading tracker: students, reading progress and a leaderboard.",
    no_args_is_help=True,
)

console = Console()


def _open_store(db_path: Path | None) -> RecordStore:
    config = load_app_config()
    return RecordStore(
        JsonFileStorage(db_path or config.storage.db_path),
        default_name=config.defaults.student_name,
    )


def _storage_failed(e: StorageUnavailable) -> None:
    console.print(f"[red]✗ {e}[/red]")
    raise typer.Exit(code=1)


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the Web API."""
    import uvicorn

    config = load_app_config()
    uvicorn.run(
        "readtrack.web.api:create_app",
        factory=True,
        host=host or config.server.host,
        port=port or config.server.port,
        reload=reload,
    )


@app.command(name="seed-books")
def seed_books(
    file: str = typer.Argument(..., help="Catalog file (.json, .yaml, .yml)"),
    db: Path | None = typer.Option(None, "--db", help="Path to the JSON document"),
) -> None:
    """Replace the book catalog with the books in FILE."""
    store = _open_store(db)
    try:
        count = seed_catalog(store, Path(file).expanduser())
    except CatalogError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)
    except StorageUnavailable as e:
        _storage_failed(e)

    console.print(f"[green]✓ Catalog seeded with {count} books[/green]")


@app.command(name="users")
def list_users(
    db: Path | None = typer.Option(None, "--db", help="Path to the JSON document"),
) -> None:
    """List registered students."""
    store = _open_store(db)
    try:
        users = store.list_users()
    except StorageUnavailable as e:
        _storage_failed(e)

    if not users:
        console.print("[yellow]No students registered yet[/yellow]")
        return

    table = Table(title=f"Students ({len(users)})")
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Books read", justify="right")
    table.add_column("Pages read", justify="right")
    for user in users:
        table.add_row(
            user.id,
            user.name,
            str(user.progress.books_read),
            str(total_pages_read(user)),
        )
    console.print(table)


@app.command()
def leaderboard(
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Rows to show"),
    db: Path | None = typer.Option(None, "--db", help="Path to the JSON document"),
) -> None:
    """Show students ranked by total pages read."""
    store = _open_store(db)
    try:
        entries = rank_students(store.list_users())
    except StorageUnavailable as e:
        _storage_failed(e)

    if not entries:
        console.print("[yellow]No students to rank yet[/yellow]")
        return

    table = Table(title="Leaderboard")
    table.add_column("#", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("ID", style="dim")
    table.add_column("Pages", justify="right")
    for entry in entries[:limit]:
        table.add_row(
            str(entry.rank), entry.name, entry.user_id, str(entry.total_pages_read)
        )
    console.print(table)
