"""History command: list/delete/export/import mission log entries."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from c2c_decipher.config.settings import DecipherConfig
from c2c_decipher.history.file_io import (
    load_log_file,
    read_import_file,
    resolve_log_file,
    save_log_file,
    write_export,
)
from c2c_decipher.history.mission_log import MissionLog

console = Console()


def history(
    action: str = typer.Argument("list", help="Action: list, delete, export, import"),
    log_file: str = typer.Option("", help="Mission log file. Env: C2C_LOG_FILE"),
    entry_id: str = typer.Option("", help="Entry ID (for delete)"),
    name: str = typer.Option("", help="Export file name (for export)"),
    output_dir: str = typer.Option("", help="Export directory (for export). Env: C2C_EXPORT_DIR"),
    source: str = typer.Option("", help="Log file to import (for import)"),
) -> None:
    """Manage the mission log."""
    path = resolve_log_file(log_file)
    log = MissionLog()
    # import never reads the current log
    if action != "import":
        loaded = load_log_file(path, log)
        if not loaded.ok:
            console.print(f"[red]{loaded.error} ({path})[/red]")
            raise typer.Exit(1)

    try:
        if action == "list":
            ok = _list_entries(log)
        elif action == "delete":
            ok = _delete_entry(log, path, entry_id)
        elif action == "export":
            ok = _export_log(log, name, output_dir)
        elif action == "import":
            ok = _import_log(log, path, source)
        else:
            console.print(f"[red]Unknown action: {action}. Use list, delete, export, or import.[/red]")
            ok = False
    except (OSError, UnicodeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        ok = False
    if not ok:
        raise typer.Exit(1)


def _list_entries(log: MissionLog) -> bool:
    if not len(log):
        console.print("[yellow]No entries recorded.[/yellow]")
        return True

    table = Table(title=f"Mission Log ({len(log)})")
    table.add_column("ID", style="cyan")
    table.add_column("Time")
    table.add_column("Label")
    table.add_column("Serial")
    table.add_column("IP")
    table.add_column("Code", style="green")
    for entry in log:
        table.add_row(
            entry.id,
            entry.timestamp,
            entry.label,
            entry.serial_number,
            entry.device_ip,
            entry.password,
        )
    console.print(table)
    return True


def _delete_entry(log: MissionLog, path: str, entry_id: str) -> bool:
    if not entry_id:
        console.print("[red]Provide --entry-id to delete an entry.[/red]")
        return False
    if not log.remove(entry_id):
        console.print(f"[yellow]Entry {entry_id} not found.[/yellow]")
        return True
    save_log_file(log, path)
    console.print(f"[green]Entry {entry_id} deleted.[/green]")
    return True


def _export_log(log: MissionLog, name: str, output_dir: str) -> bool:
    if not len(log):
        console.print("[yellow]Nothing to export.[/yellow]")
        return True
    directory = output_dir or DecipherConfig.from_env().export_dir
    out_path = write_export(log, directory, name)
    console.print(f"[green]Exported {len(log)} entries to {out_path}[/green]")
    return True


def _import_log(log: MissionLog, path: str, source: str) -> bool:
    if not source:
        console.print("[red]Provide --source to import a log file.[/red]")
        return False
    result = read_import_file(source)
    if not result.ok:
        console.print(f"[red]{result.error}[/red]")
        return False
    log.replace_all(result.entries)
    save_log_file(log, path)
    console.print(f"[green]Imported {len(log)} entries (previous log replaced).[/green]")
    return True
