"""
Memory inspection commands.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from vectorgate.cli.utils.service import run_service_call
from vectorgate.core.exceptions.custom_exceptions import NotFoundError
from vectorgate.core.logging.logger import get_logger
from vectorgate.service import VectorService
from vectorgate.storage.models import MemoryRecord

app = typer.Typer(help="Inspect and delete memories")
console = Console()
logger = get_logger(__name__)


@app.command(name="list")
def list_memories(
    user_id: int = typer.Option(..., "--user-id", "-u", help="Owner of the memories"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Category filter"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Maximum entries"),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n", help="Namespace"),
) -> None:
    """List a user's active memories"""
    entries = run_service_call(
        lambda service: service.memories.scroll(user_id, category, limit, namespace)
    )

    table = Table(title=f"Memories of user {user_id}")
    table.add_column("ID", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Key", style="yellow")
    table.add_column("Value", style="green")

    for entry in entries:
        table.add_row(entry.id, entry.record.category, entry.record.key, entry.record.value)

    console.print(table)
    console.print(f"{len(entries)} memories")


@app.command()
def get(
    point_id: str = typer.Argument(..., help="Memory ID"),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n", help="Namespace"),
) -> None:
    """Show a single memory"""

    async def _get(service: VectorService) -> MemoryRecord:
        record = await service.memories.get(point_id, namespace)
        if record is None:
            raise NotFoundError(f"Memory not found: {point_id}")
        return record

    record = run_service_call(_get)
    console.print_json(record.model_dump_json())


@app.command()
def delete(
    point_id: str = typer.Argument(..., help="Memory ID"),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n", help="Namespace"),
) -> None:
    """Delete a single memory"""
    run_service_call(lambda service: service.memories.delete(point_id, namespace))
    console.print(f"🗑️  Memory {point_id} deleted", style="bold green")
