#!/usr/bin/env python3
"""CLI entry point for the CAD sync system."""

import argparse
import logging
import sys
import time
from collections import Counter
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .core.operations import SCOPE_ALL, SCOPE_SELECTED, ExportOperations, ExportResult
from .core.poller import ChangePoller
from .core.prompts import RichPrompter
from .core.settings_store import SettingsStore
from .core.trigger import ImportTrigger, SubprocessCommandQueue
from .errors import CadSyncError
from .host.scene import load_scene
from .models.config import CadSyncConfig
from .models.export import load_export_document, load_sync_metadata

console = Console()


def setup_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def load_config(args: argparse.Namespace) -> CadSyncConfig:
    """Load config, applying the --root override."""
    config = CadSyncConfig.load(Path(args.config) if args.config else None)
    if args.root:
        config.sync_root = Path(args.root).expanduser()
    return config


def _scope(args: argparse.Namespace) -> str | None:
    if args.all:
        return SCOPE_ALL
    if args.selected:
        return SCOPE_SELECTED
    return None


def _report_export(result: ExportResult) -> int:
    if result.success:
        console.print(f"[green]{result.message}")
        console.print(f"Sync folder: {result.sync_folder}")
        return 0
    if result.cancelled:
        console.print(f"[yellow]{result.message}")
        return 2
    console.print(f"[red]{result.message}")
    return 1


def cmd_export(args: argparse.Namespace) -> int:
    """Export a scene, choosing the target."""
    config = load_config(args)
    document = load_scene(Path(args.scene))
    ops = ExportOperations(config, RichPrompter(console))
    return _report_export(ops.export(document, scope=_scope(args)))


def cmd_export_last(args: argparse.Namespace) -> int:
    """Export a scene to its remembered target."""
    config = load_config(args)
    document = load_scene(Path(args.scene))
    ops = ExportOperations(config, RichPrompter(console))
    return _report_export(ops.export_last(document, scope=_scope(args)))


def _resolve_folder(config: CadSyncConfig, target_or_folder: str) -> Path:
    path = Path(target_or_folder).expanduser()
    if path.is_dir():
        return path
    return config.sync_folder_for(target_or_folder)


class _ConsoleCommandQueue:
    """Prints import commands instead of running them."""

    def send(self, command: str, export_file: Path) -> None:
        console.print(f"[green]{command}[/green] {export_file}")


def cmd_watch(args: argparse.Namespace) -> int:
    """Watch a sync folder and trigger imports."""
    config = load_config(args)
    folder = _resolve_folder(config, args.target)
    interval = args.interval or config.poll_interval

    if args.exec:
        commands = SubprocessCommandQueue(args.exec)
    else:
        commands = _ConsoleCommandQueue()

    poller = ChangePoller(
        ImportTrigger(commands, config.import_command),
        interval=interval,
        export_filename=config.export_filename,
    )

    console.print(f"[blue]Watching[/blue] {folder} [dim](every {interval}s, Ctrl-C to stop)[/dim]")
    poller.start(folder)
    try:
        while poller.is_watching:
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass
    finally:
        poller.stop()
        console.print("[dim]Auto-sync stopped[/dim]")

    return 0


def cmd_status(args: argparse.Namespace) -> int:
    """Show remembered targets."""
    config = load_config(args)
    status = SettingsStore(config.sync_root, config.settings_filename).get_status_summary()

    console.print(f"\n[bold]Sync Root:[/bold] {config.sync_root}")
    console.print(f"[bold]Settings File:[/bold] {status['settings_file']}")
    console.print(f"[bold]Last Directory:[/bold] {status['last_directory'] or 'Not set'}")
    console.print(f"[bold]Tracked Files:[/bold] {status['tracked_files']}")

    if status["files"]:
        table = Table()
        table.add_column("Source")
        table.add_column("Target")
        table.add_column("Last Sync")

        for f in status["files"]:
            target = f["target"] if f["target_exists"] else f"[red]{f['target']} (missing)"
            table.add_row(f["source"], target, f["last_sync"][:19] if f["last_sync"] else "Never")

        console.print(table)
    else:
        console.print("[dim]No files tracked yet. Run 'export' to start syncing.[/dim]")

    return 0


def cmd_folder(args: argparse.Namespace) -> int:
    """Print the sync folder for a target file."""
    config = load_config(args)
    console.print(str(config.sync_folder_for(args.target)), soft_wrap=True)
    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    """Summarize the documents in a sync folder."""
    config = load_config(args)
    folder = _resolve_folder(config, args.target)
    metadata_path = folder / config.metadata_filename
    export_path = folder / config.export_filename

    if not export_path.exists():
        console.print(f"[red]No export found in {folder}")
        return 1

    try:
        metadata = load_sync_metadata(metadata_path) if metadata_path.exists() else None
        document = load_export_document(export_path)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        console.print(f"[red]Invalid export document in {folder}: {e}")
        return 1

    if metadata is not None:
        console.print(f"\n[bold]Source:[/bold] {metadata.source_file}")
        console.print(f"[bold]Target:[/bold] {metadata.target_file}")
        console.print(f"[bold]Last Sync:[/bold] {metadata.last_sync}")
        console.print(f"[bold]Object Count:[/bold] {metadata.object_count}")

    counts = Counter(obj.geometry_type for obj in document.objects)

    table = Table(title=f"\n{export_path.name} (schema {document.version})")
    table.add_column("Geometry Type", style="cyan")
    table.add_column("Objects", justify="right")
    for geometry_type, count in sorted(counts.items()):
        table.add_row(geometry_type, str(count))
    console.print(table)

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="cadsync",
        description="Hand geometry from one CAD application to another through a sync folder",
    )
    parser.add_argument("--config", help="Config file (default: <sync root>/cadsync.yaml)")
    parser.add_argument("--root", help="Override the sync root directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # export commands
    for name, help_text in (
        ("export", "Export a scene, choosing the sync target"),
        ("export-last", "Export a scene to its last sync target"),
    ):
        export_parser = subparsers.add_parser(name, help=help_text)
        export_parser.add_argument("scene", help="Scene file (YAML)")
        scope_group = export_parser.add_mutually_exclusive_group()
        scope_group.add_argument("--all", action="store_true", help="Export all visible objects")
        scope_group.add_argument("--selected", action="store_true", help="Export selected objects only")

    # watch command
    watch_parser = subparsers.add_parser("watch", help="Watch a sync folder and trigger imports")
    watch_parser.add_argument("target", help="Target file or sync folder")
    watch_parser.add_argument("--interval", type=float, help="Seconds between checks")
    watch_parser.add_argument(
        "--exec",
        help="Decoder command line; {command} and {export_file} are substituted",
    )

    # status command
    subparsers.add_parser("status", help="Show remembered sync targets")

    # folder command
    folder_parser = subparsers.add_parser("folder", help="Show the sync folder for a target file")
    folder_parser.add_argument("target", help="Target file")

    # inspect command
    inspect_parser = subparsers.add_parser("inspect", help="Summarize a sync folder")
    inspect_parser.add_argument("target", help="Target file or sync folder")

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    handlers = {
        "export": cmd_export,
        "export-last": cmd_export_last,
        "watch": cmd_watch,
        "status": cmd_status,
        "folder": cmd_folder,
        "inspect": cmd_inspect,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except CadSyncError as e:
        console.print(f"[red]Error: {e}")
        return 1
    except OSError as e:
        console.print(f"[red]Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
