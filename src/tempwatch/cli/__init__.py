"""tempwatch CLI -- typer-based command interface.

Commands:
    tempwatch run        Poll a source, print threshold alerts
    tempwatch check      Evaluate a fixed reading sequence offline
    tempwatch convert    Celsius <-> Fahrenheit
    tempwatch sensors    List hwmon temperature inputs
"""

from __future__ import annotations

import typer

from tempwatch.cli import run as run_cmd
from tempwatch.cli._errors import handle_error

app = typer.Typer(
    name="tempwatch",
    help="Watch a temperature source for directional threshold crossings.",
    no_args_is_help=True,
)

app.command("run")(run_cmd.run)
app.command("check")(run_cmd.check)


@app.command("convert")
def convert(
    value: float = typer.Argument(..., help="Temperature to convert"),
    to: str = typer.Option("f", "--to", help="Target unit: 'f' or 'c'"),
) -> None:
    """Convert a temperature between Celsius and Fahrenheit.

    Negative values need a `--` first: tempwatch convert --to c -- -40
    """
    from tempwatch.units import celsius_to_fahrenheit, fahrenheit_to_celsius

    unit = to.strip().lower()
    if unit == "f":
        typer.echo(f"{celsius_to_fahrenheit(value):.2f}°F")
    elif unit == "c":
        typer.echo(f"{fahrenheit_to_celsius(value):.2f}°C")
    else:
        handle_error(f"Unknown unit {to!r}: use 'f' or 'c'")


@app.command("sensors")
def sensors(
    root: str = typer.Option("/sys/class/hwmon", "--root", help="hwmon sysfs root"),
) -> None:
    """List hwmon temperature inputs usable with `run --sensor`."""
    from tempwatch.sources import discover_sensors

    found = discover_sensors(root)
    if not found:
        typer.echo("No hwmon temperature sensors found.")
        raise typer.Exit(0)
    for s in found:
        typer.echo(f"{s['label']}\t{s['path']}")


def main() -> None:
    """Entry point for the tempwatch CLI."""
    app()
