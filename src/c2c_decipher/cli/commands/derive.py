"""Derive command: compute the unlock code for a device."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from c2c_decipher.config.settings import LATENCY_THRESHOLD_MS
from c2c_decipher.derivation.engine import CodeDerivationEngine
from c2c_decipher.derivation.models import CodeStatus, DerivedCode, SegmentBreakdown
from c2c_decipher.derivation.validator import DescriptorValidator
from c2c_decipher.history.file_io import load_log_file, resolve_log_file, save_log_file
from c2c_decipher.session import DecipherSession

console = Console()


def derive(
    serial: str = typer.Option("", help="Serial number (XXXX-XXXX)"),
    name: str = typer.Option("", help="Device name"),
    ip: str = typer.Option("", help="Device IP address"),
    model: str = typer.Option("", help="Device model (XXX-XXX)"),
    day: str = typer.Option("01", help="Fabrication day (01-31)"),
    month: str = typer.Option("01", help="Fabrication month (01-12)"),
    latency: str = typer.Option("", help="Latency in milliseconds"),
    save: bool = typer.Option(False, help="Save the code to the mission log"),
    label: str = typer.Option("", help="Label for the saved entry"),
    log_file: str = typer.Option("", help="Mission log file. Env: C2C_LOG_FILE"),
) -> None:
    """Derive the unlock code from device identification data."""
    session = DecipherSession()
    session.update(
        serial_number=serial,
        device_name=name,
        device_ip=ip,
        device_model=model,
        fab_day=day,
        fab_month=month,
        latency=latency,
    )
    code = session.recompute()

    for warning in DescriptorValidator().format_warnings(session.descriptor):
        console.print(f"[yellow]Warning: {warning}[/yellow]")

    breakdown = CodeDerivationEngine().explain(session.descriptor) if code.is_valid else None
    _show_code(code, breakdown)

    commands = {k: v for k, v in session.commands().items() if v and k != "Code"}
    if commands:
        console.print()
        for label_text, command in commands.items():
            console.print(f"[dim]{label_text}:[/dim] {command}")

    if not save:
        return
    if not code.is_valid:
        console.print(f"[red]Cannot save a {code.text} code.[/red]")
        raise typer.Exit(1)

    path = resolve_log_file(log_file)
    result = load_log_file(path, session.log)
    if not result.ok:
        console.print(f"[red]{result.error} ({path})[/red]")
        raise typer.Exit(1)

    entry = session.save(label)
    try:
        save_log_file(session.log, path)
    except (OSError, UnicodeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Saved {entry.password} as '{entry.label}' ({entry.id}) to {path}[/green]")


def _show_code(code: DerivedCode, breakdown: Optional[SegmentBreakdown]) -> None:
    if not code.is_valid:
        style = "yellow" if code.status is CodeStatus.PENDING else "red"
        detail = code.reason
        if code.missing:
            detail = "Missing: " + ", ".join(code.missing)
        console.print(Panel(detail or code.text, title=code.text, border_style=style))
        return

    table = Table(title="Segments")
    table.add_column("Segment", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Rule")
    rules = _describe_segments(breakdown)
    for segment, value, rule in zip(("AA", "BB", "CC", "DD"), code.segments, rules):
        table.add_row(segment, value, rule)
    console.print(table)
    console.print(Panel(f"[bold]{code.text}[/bold]", title="Unlock Code", border_style="green"))


def _describe_segments(b: SegmentBreakdown) -> list[str]:
    """One line per segment naming the values it was computed from."""
    if b.first_digit is None:
        aa = "No digit in serial"
    else:
        parity = "even" if b.first_digit % 2 == 0 else "odd"
        side = "first" if parity == "even" else "last"
        aa = f"Serial digit {b.first_digit} ({parity}): {side} two of {b.model_key}"

    if b.latency_ms is None:
        bb = "Latency not a number"
    elif b.latency_ms < LATENCY_THRESHOLD_MS:
        bb = f"Latency {b.latency_ms} < {LATENCY_THRESHOLD_MS}: fab day"
    else:
        bb = f"Latency {b.latency_ms} >= {LATENCY_THRESHOLD_MS}: fab month"

    cc = f"IP digit sum {b.ip_digit_sum}"
    dd = f"{b.vowels} vowels, {b.consonants} consonants"
    return [aa, bb, cc, dd]
