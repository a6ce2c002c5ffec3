"""
Service health and information commands.
"""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from vectorgate.cli.utils.service import run_service_call
from vectorgate.core.logging.logger import get_logger

app = typer.Typer(help="Service health and information")
console = Console()
logger = get_logger(__name__)


@app.command()
def health() -> None:
    """Check that the vector engine answers"""
    healthy = run_service_call(lambda service: service.health_check())

    if healthy:
        console.print("✅ Vector engine is healthy", style="bold green")
    else:
        console.print("❌ Vector engine is unreachable", style="bold red")
        raise typer.Exit(1)


@app.command()
def info(
    namespace: Optional[str] = typer.Option(
        None, "--namespace", "-n", help="Memory namespace to report on"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """Show capabilities, collection status and operation counters"""
    data = run_service_call(lambda service: service.service_info(namespace))

    if as_json:
        console.print_json(json.dumps(data))
        return

    table = Table(title="VectorGate Service Information")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Service", data["service"])
    table.add_row("Version", data["version"])
    table.add_row("Status", data["status"])
    table.add_row("Vector dimension", str(data["vector_dimension"]))
    table.add_row("Embedding backend", str(data["embedding"]["backend"]))
    collection = data["collection"]
    if collection is None:
        table.add_row("Collection status", "unavailable")
    else:
        table.add_row("Collection status", collection["status"])
        table.add_row("Points", str(collection["points_count"]))
    table.add_row("Uptime", data["stats"]["uptime"])

    console.print(table)
