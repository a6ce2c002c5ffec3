"""
Document lifecycle commands.

Counts printed by the delete and reassign commands are best-effort: they are
the number of matching chunks counted right before the change.
"""

import typer
from rich.console import Console
from rich.table import Table

from vectorgate.cli.utils.service import run_service_call
from vectorgate.core.logging.logger import get_logger

app = typer.Typer(help="Document chunk statistics and lifecycle")
console = Console()
logger = get_logger(__name__)


@app.command()
def stats(
    user_id: int = typer.Option(..., "--user-id", "-u", help="Owner of the documents"),
) -> None:
    """Show chunk, file and group counts for a user (scans all their chunks)"""
    result = run_service_call(lambda service: service.documents.get_stats(user_id))

    table = Table(title=f"Document statistics for user {user_id}")
    table.add_column("Group", style="cyan")
    table.add_column("Chunks", style="green", justify="right")
    for group_key, count in sorted(result.chunks_by_group.items()):
        table.add_row(group_key, str(count))

    console.print(table)
    console.print(
        f"Chunks: {result.total_chunks}  Files: {result.total_files}  "
        f"Groups: {result.total_groups}"
    )


@app.command()
def groups(
    user_id: int = typer.Option(..., "--user-id", "-u", help="Owner of the documents"),
) -> None:
    """List a user's distinct group keys"""
    keys = run_service_call(lambda service: service.documents.get_group_keys(user_id))
    for key in keys:
        console.print(key)


@app.command(name="delete-file")
def delete_file(
    user_id: int = typer.Option(..., "--user-id", "-u", help="Owner of the file"),
    file_id: int = typer.Option(..., "--file-id", "-f", help="File to delete"),
) -> None:
    """Delete every chunk of a file"""
    count = run_service_call(
        lambda service: service.documents.delete_by_file(user_id, file_id)
    )
    console.print(f"🗑️  Deleted ~{count} chunks of file {file_id}", style="bold green")


@app.command(name="reassign-group")
def reassign_group(
    user_id: int = typer.Option(..., "--user-id", "-u", help="Owner of the file"),
    file_id: int = typer.Option(..., "--file-id", "-f", help="File to move"),
    group_key: str = typer.Option(..., "--group-key", "-g", help="New group key"),
) -> None:
    """Move all chunks of a file to another group"""
    count = run_service_call(
        lambda service: service.documents.reassign_group_key(user_id, file_id, group_key)
    )
    console.print(
        f"✅ Moved ~{count} chunks of file {file_id} to '{group_key}'", style="bold green"
    )
