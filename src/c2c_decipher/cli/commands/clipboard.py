"""Commands command: print copyable terminal commands for a device."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from c2c_decipher.derivation.commands import (
    identify_command,
    override_command,
    ping_command,
    scan_command,
)

console = Console()


def commands(
    serial: str = typer.Option("", help="Serial number"),
    name: str = typer.Option("", help="Device name"),
    ip: str = typer.Option("", help="Device IP address"),
    plain: bool = typer.Option(False, help="Print one command per line, no table"),
) -> None:
    """Show the /identify, /scan, /ping and /override commands."""
    rows = [
        ("Identify", identify_command(serial.upper())),
        ("Scan", scan_command(name)),
        ("Ping", ping_command(ip)),
        ("Override", override_command(ip)),
    ]
    rows = [(k, v) for k, v in rows if v]
    if not rows:
        console.print("[yellow]Provide --serial, --name or --ip.[/yellow]")
        raise typer.Exit(1)

    if plain:
        for _, command in rows:
            typer.echo(command)
        return

    table = Table(title="Commands")
    table.add_column("Action", style="cyan")
    table.add_column("Command")
    for action, command in rows:
        table.add_row(action, command)
    console.print(table)
