"""Typer CLI application."""

import logging
import sys

import typer

from c2c_decipher.cli.commands.clipboard import commands
from c2c_decipher.cli.commands.derive import derive
from c2c_decipher.cli.commands.history import history
from c2c_decipher.config.settings import DecipherConfig

app = typer.Typer(
    name="c2c-decipher",
    help="C2C Decipher: unlock code derivation and mission log",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: str = typer.Option("", help="Logging level. Env: C2C_LOG_LEVEL"),
) -> None:
    """C2C Decipher: unlock code derivation and mission log."""
    config = DecipherConfig.from_env()
    if log_level:
        config.log_level = log_level.upper()
    errors = config.validate()
    if errors:
        for err in errors:
            typer.echo(f"Config error: {err}", err=True)
        raise typer.Exit(1)

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


app.command()(derive)
app.command()(commands)
app.command()(history)
