"""
Helpers for running async service calls from synchronous CLI commands.
"""

import asyncio
from typing import Awaitable, Callable, TypeVar

import typer
from rich.console import Console

from vectorgate.core.config.settings import settings
from vectorgate.core.exceptions.custom_exceptions import VectorGateError
from vectorgate.core.logging.logger import get_logger
from vectorgate.service import VectorService

T = TypeVar("T")

console = Console()
logger = get_logger(__name__)


def build_service() -> VectorService:
    """Create the service from the process settings."""
    return VectorService.from_settings(settings)


def run_service_call(call: Callable[[VectorService], Awaitable[T]]) -> T:
    """
    Run ``call`` against a fresh service and close it afterwards.

    VectorGate errors are printed and turned into exit code 1.
    """

    async def _run() -> T:
        service = build_service()
        try:
            return await call(service)
        finally:
            await service.close()

    try:
        return asyncio.run(_run())
    except VectorGateError as e:
        logger.error(f"Command failed: {e.message}", error_code=e.error_code)
        console.print(f"[bold red]Error:[/bold red] {e.public_message}", markup=True)
        raise typer.Exit(1)
