"""
Collection provisioning and inspection commands.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from vectorgate.cli.utils.service import run_service_call
from vectorgate.core.logging.logger import get_logger
from vectorgate.service import VectorService

app = typer.Typer(help="Provision and inspect collections")
console = Console()
logger = get_logger(__name__)


@app.command()
def ensure(
    namespace: Optional[str] = typer.Option(
        None, "--namespace", "-n", help="Memory namespace to provision"
    ),
) -> None:
    """Create the memory (and document) collections if they are missing"""

    async def _ensure(service: VectorService) -> str:
        if namespace is None:
            await service.startup()
            return (
                f"{service.memories.collection_for()}, "
                f"{service.documents.collection_name}"
            )
        return await service.memories.ensure_collection(namespace)

    created = run_service_call(_ensure)
    console.print(f"✅ Collections ready: {created}", style="bold green")


@app.command()
def info(
    namespace: Optional[str] = typer.Option(
        None, "--namespace", "-n", help="Memory namespace to inspect"
    ),
) -> None:
    """Show status and point counts of a memory collection"""

    async def _info(service: VectorService):
        return (
            service.memories.collection_for(namespace),
            await service.memories.get_collection_info(namespace),
        )

    name, collection = run_service_call(_info)

    table = Table(title=f"Collection '{name}'")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Status", collection.status)
    table.add_row("Points", str(collection.points_count))
    table.add_row("Vectors", str(collection.vectors_count))
    table.add_row("Indexed vectors", str(collection.indexed_vectors_count))
    console.print(table)
