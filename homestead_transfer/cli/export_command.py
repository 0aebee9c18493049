"""CLI command for exporting homestead data."""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from homestead_transfer.backup.service import DataTransferService
from homestead_transfer.config import get_config

logger = logging.getLogger(__name__)
console = Console()


async def export_command(
    scope: str = "full",
    format: str = "json",
    user_id: Optional[str] = None,
    output_dir: Optional[str] = None,
    service: Optional[DataTransferService] = None,
) -> int:
    """
    Export a scope and save the artifact to disk.

    Args:
        scope: Export scope (full, garden, livestock, ...)
        format: Export format (json or csv)
        user_id: User recorded with the export
        output_dir: Directory receiving the file (defaults to config.export_dir)
        service: Existing service to use instead of building one from config

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    config = get_config()
    owns_service = service is None
    if service is None:
        service = await DataTransferService.create(config)

    try:
        console.print("\n[bold blue]Homestead Export[/bold blue]\n")

        result = await service.export_data(scope, format, user_id)
        if not result.success:
            console.print(f"[red]Error:[/red] {result.message}")
            return 1

        directory = Path(output_dir).expanduser() if output_dir else config.export_dir_expanded
        output_path = result.artifact.write_to(directory)

        results_table = Table(show_header=False, box=None)
        results_table.add_row("[green]✓[/green] Export completed successfully")
        results_table.add_row("")
        results_table.add_row("[cyan]Records Exported:[/cyan]", str(result.record_count))
        results_table.add_row(
            "[cyan]Collections:[/cyan]",
            ", ".join(name for name in result.bundle if name != "meta") or "(none)",
        )
        results_table.add_row("[cyan]Output File:[/cyan]", str(output_path))
        results_table.add_row("[cyan]File Size:[/cyan]", f"{result.artifact.size:,} bytes")
        if format == "csv" and len(result.bundle) > 1:
            results_table.add_row(
                "[yellow]Note:[/yellow]",
                "CSV holds the first populated collection only; use JSON for a full backup",
            )

        console.print(Panel(results_table, title="Export Results", border_style="green"))
        console.print()
        return 0

    except OSError as e:
        console.print(f"\n[red]Error:[/red] Could not write export: {e}")
        logger.error(f"Export command failed: {e}", exc_info=True)
        return 1

    finally:
        if owns_service:
            await service.close()
