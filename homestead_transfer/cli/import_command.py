"""CLI command for importing homestead data from an export file."""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.prompt import Confirm

from homestead_transfer.backup.service import DataTransferService
from homestead_transfer.config import get_config
from homestead_transfer.core.models import ConflictStrategy

logger = logging.getLogger(__name__)
console = Console()


async def import_command(
    input_file: str,
    conflict_strategy: str = "skip",
    user_id: Optional[str] = None,
    dry_run: bool = False,
    yes: bool = False,
    service: Optional[DataTransferService] = None,
) -> int:
    """
    Import records from an export file.

    Args:
        input_file: Path to a JSON export
        conflict_strategy: skip, overwrite or copy
        user_id: User recorded with the import
        dry_run: If True, report what would be imported without writing
        yes: Skip confirmation prompt
        service: Existing service to use instead of building one from config

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    console.print("\n[bold blue]Homestead Import[/bold blue]\n")

    try:
        strategy = ConflictStrategy(conflict_strategy)
    except ValueError:
        console.print(f"[red]Error:[/red] Invalid conflict strategy: {conflict_strategy}")
        console.print(f"Valid strategies: {', '.join(s.value for s in ConflictStrategy)}")
        return 1

    input_path = Path(input_file).expanduser()
    if not input_path.exists():
        console.print(f"[red]Error:[/red] File not found: {input_file}")
        return 1

    config_table = Table(show_header=False, box=None)
    config_table.add_row("[cyan]Input File:[/cyan]", str(input_path))
    config_table.add_row("[cyan]Conflict Strategy:[/cyan]", f"{strategy.value} - {strategy.description}")
    config_table.add_row("[cyan]Mode:[/cyan]", "[yellow]DRY RUN[/yellow]" if dry_run else "[green]LIVE IMPORT[/green]")
    console.print(Panel(config_table, title="Import Configuration", border_style="blue"))
    console.print()

    if not dry_run and not yes:
        if not Confirm.ask(
            "[yellow]⚠ Importing will modify your local data. Make sure you have a backup. Continue?[/yellow]"
        ):
            console.print("[yellow]Import cancelled.[/yellow]")
            return 0

    owns_service = service is None
    if service is None:
        service = await DataTransferService.create(get_config())

    try:
        result = await service.import_file(input_path, strategy, user_id, dry_run=dry_run)
    finally:
        if owns_service:
            await service.close()

    if not result.success:
        console.print(f"[red]Error:[/red] {result.message}")
        return 1

    results_table = Table(show_header=False, box=None)
    if dry_run:
        results_table.add_row("[yellow]⚠[/yellow] Dry run completed (no changes made)")
    else:
        results_table.add_row(f"[green]✓[/green] {result.message}")
    results_table.add_row("")
    results_table.add_row("[cyan]Imported:[/cyan]", f"[green]{result.record_count}[/green]")
    results_table.add_row("[cyan]Skipped:[/cyan]", f"[yellow]{result.skipped}[/yellow]")
    if result.collections:
        results_table.add_row("[cyan]Collections:[/cyan]", ", ".join(result.collections))

    border_style = "yellow" if dry_run else "green"
    title = "Dry Run Results" if dry_run else "Import Results"
    console.print(Panel(results_table, title=title, border_style=border_style))
    console.print()

    if dry_run:
        console.print("[yellow]Tip:[/yellow] Remove --dry-run to perform the actual import")
        console.print()

    return 0
