"""
VectorGate CLI - Main entry point
"""

import typer
from rich.console import Console
from rich.table import Table

from vectorgate.cli.commands import collections, documents, memories, status
from vectorgate.core.config.settings import settings
from vectorgate.core.logging.logger import get_logger, setup_logging

app = typer.Typer(
    name="vectorgate",
    help="Multi-tenant memory and document storage over a vector database",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()
logger = get_logger(__name__)

app.add_typer(status.app, name="status", help="Service status commands")
app.add_typer(collections.app, name="collections", help="Collection management commands")
app.add_typer(memories.app, name="memories", help="Memory inspection commands")
app.add_typer(documents.app, name="documents", help="Document lifecycle commands")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging"
    ),
) -> None:
    """
    VectorGate CLI - tenant-scoped access to memories and document chunks

    Run 'vectorgate --help' for available commands.
    """
    if verbose:
        setup_logging("DEBUG")
        logger.info("Verbose logging enabled")


@app.command()
def version() -> None:
    """Show VectorGate version information"""
    table = Table(title="VectorGate Version Information")
    table.add_column("Component", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Environment", style="yellow")

    table.add_row("VectorGate", settings.APP_VERSION, settings.ENVIRONMENT)
    table.add_row("Backend", settings.VECTOR_BACKEND, settings.QDRANT_URL)
    table.add_row("Vector dimension", str(settings.VECTOR_DIMENSION), "Configured")

    console.print(table)


if __name__ == "__main__":
    app()
