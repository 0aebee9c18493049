"""CLI commands for Homestead Transfer."""

import argparse
import asyncio
import logging
import sys

from homestead_transfer.cli.export_command import export_command
from homestead_transfer.cli.import_command import import_command
from homestead_transfer.cli.history_command import history_command, scopes_command
from homestead_transfer.config import get_config
from homestead_transfer.core.models import ConflictStrategy, ExportFormat, ExportScope
from homestead_transfer.log_utils import configure_logging


def setup_logging(level: str = "INFO", use_json: bool = False):
    """Configure logging for CLI."""
    configure_logging(use_json=use_json, level=getattr(logging, level.upper()))


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    strategy_help = "\n".join(f"  {s.value:<10} {s.description}" for s in ConflictStrategy)
    parser = argparse.ArgumentParser(
        prog="homestead-transfer",
        description="Export and restore homestead data",
        epilog=f"""
Commands:
    export     Export a scope to JSON or CSV
    import     Restore records from a JSON export
    history    Show recent exports and imports
    scopes     List export scopes and their collections

Conflict strategies:
{strategy_help}

For detailed help on any command: homestead-transfer <command> --help
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging level (default: from config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    export_parser = subparsers.add_parser("export", help="Export a scope to a file")
    export_parser.add_argument(
        "--scope",
        choices=[s.value for s in ExportScope],
        default=ExportScope.FULL.value,
        help="Data scope (default: full)",
    )
    export_parser.add_argument(
        "--format",
        choices=[f.value for f in ExportFormat],
        default=ExportFormat.JSON.value,
        help="json restores completely; csv holds the first populated collection only",
    )
    export_parser.add_argument("--user", dest="user_id", help="User id recorded with the export")
    export_parser.add_argument("--output-dir", help="Directory for the export file (default: config export_dir)")

    import_parser = subparsers.add_parser("import", help="Restore records from a JSON export")
    import_parser.add_argument("input_file", help="Path to the export file")
    import_parser.add_argument(
        "--strategy",
        dest="conflict_strategy",
        choices=[s.value for s in ConflictStrategy],
        default=ConflictStrategy.SKIP.value,
        help="How to treat records whose id already exists (default: skip)",
    )
    import_parser.add_argument("--user", dest="user_id", help="User id recorded with the import")
    import_parser.add_argument("--dry-run", action="store_true", help="Report without writing")
    import_parser.add_argument("-y", "--yes", action="store_true", help="Skip confirmation prompt")

    history_parser = subparsers.add_parser("history", help="Show recent exports and imports")
    which = history_parser.add_mutually_exclusive_group()
    which.add_argument("--exports", action="store_true", help="Only show exports")
    which.add_argument("--imports", action="store_true", help="Only show imports")
    history_parser.add_argument("--limit", type=int, default=10, help="Entries per table (default: 10)")

    subparsers.add_parser("scopes", help="List export scopes")

    return parser


async def main_async(args) -> int:
    """Async main function to handle commands."""
    if args.command == "export":
        return await export_command(
            scope=args.scope,
            format=args.format,
            user_id=args.user_id,
            output_dir=args.output_dir,
        )
    elif args.command == "import":
        return await import_command(
            input_file=args.input_file,
            conflict_strategy=args.conflict_strategy,
            user_id=args.user_id,
            dry_run=args.dry_run,
            yes=args.yes,
        )
    elif args.command == "history":
        return await history_command(
            show_exports=not args.imports,
            show_imports=not args.exports,
            limit=args.limit,
        )
    elif args.command == "scopes":
        return scopes_command()
    else:
        print("No command specified. Use --help for usage information.")
        return 1


def main():
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args()

    config = get_config()
    setup_logging(args.log_level or config.log_level, use_json=config.json_logging)

    try:
        exit_code = asyncio.run(main_async(args))
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(0)
    except Exception as e:
        logging.error(f"Command failed: {e}", exc_info=True)
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
