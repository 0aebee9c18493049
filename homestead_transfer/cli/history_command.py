"""CLI commands for transfer history and the scope registry."""

from datetime import datetime, UTC
from typing import Optional

from rich.console import Console
from rich.table import Table

from homestead_transfer.backup.scopes import describe_scopes
from homestead_transfer.backup.service import DataTransferService
from homestead_transfer.config import get_config

console = Console()


def _format_ms(timestamp_ms: int) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000, UTC).strftime("%Y-%m-%d %H:%M:%S")


async def history_command(
    show_exports: bool = True,
    show_imports: bool = True,
    limit: Optional[int] = 10,
    service: Optional[DataTransferService] = None,
) -> int:
    """
    Print recent exports and imports, newest first.

    Returns:
        Exit code (always 0)
    """
    owns_service = service is None
    if service is None:
        service = await DataTransferService.create(get_config())

    try:
        if show_exports:
            exports = await service.get_export_history(limit)
            table = Table(title="Recent Exports")
            table.add_column("When", style="cyan")
            table.add_column("Scope")
            table.add_column("Format")
            table.add_column("Records", justify="right")
            table.add_column("Size", justify="right")
            table.add_column("File")
            for entry in exports:
                table.add_row(
                    _format_ms(entry.created_at),
                    entry.scope.value,
                    entry.format.value.upper(),
                    str(entry.record_count),
                    f"{entry.file_size / 1024:.1f} KB",
                    entry.file_name,
                )
            console.print(table if exports else "[dim]No recent exports.[/dim]")

        if show_imports:
            imports = await service.get_import_history(limit)
            table = Table(title="Recent Imports")
            table.add_column("When", style="cyan")
            table.add_column("Strategy")
            table.add_column("Records", justify="right")
            table.add_column("File")
            for entry in imports:
                table.add_row(
                    _format_ms(entry.created_at),
                    entry.conflict_strategy.value,
                    str(entry.record_count),
                    entry.file_name,
                )
            console.print(table if imports else "[dim]No recent imports.[/dim]")
    finally:
        if owns_service:
            await service.close()

    return 0


def scopes_command() -> int:
    """Print the scope registry."""
    table = Table(title="Export Scopes")
    table.add_column("Scope", style="cyan")
    table.add_column("Collections")
    for scope, collections in describe_scopes().items():
        table.add_row(scope, ", ".join(collections))
    console.print(table)
    return 0
