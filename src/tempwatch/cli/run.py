"""CLI commands that drive a ThresholdMonitor: run (poll a source) and check (offline)."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer

from tempwatch.cli._errors import handle_error
from tempwatch.cli._parse import parse_readings, parse_threshold
from tempwatch.config import MonitorConfig
from tempwatch.errors import InvalidConfiguration, InvalidSample, SourceError
from tempwatch.monitor import ThresholdMonitor
from tempwatch.observability.events import SampleIngested, ThresholdCrossed, event_to_dict
from tempwatch.threshold import Direction, Threshold

# Freezing both ways, boiling on the way up
DEMO_THRESHOLDS: tuple[tuple[float, float, Direction], ...] = (
    (0.0, 0.5, Direction.BOTH),
    (100.0, 0.5, Direction.UP),
)


def format_alert(event: ThresholdCrossed) -> str:
    return (
        f"Threshold {event.threshold.target}°C ({event.direction.value}) "
        f"reached at {event.value}°C / {event.value_fahrenheit:.1f}°F"
    )


def _print_alert(event: ThresholdCrossed) -> None:
    typer.echo(format_alert(event))


def _print_alert_json(event: ThresholdCrossed) -> None:
    typer.echo(json.dumps(event_to_dict(event), default=str, ensure_ascii=False))


def _print_reading(event: SampleIngested) -> None:
    typer.echo(f"Reading: {event.value}°C / {event.value_fahrenheit:.1f}°F")


def _thresholds_from_options(specs: list[str] | None) -> list[Threshold]:
    thresholds = []
    for spec in specs or []:
        try:
            thresholds.append(parse_threshold(spec))
        except ValueError as e:
            handle_error(str(e))
    return thresholds


def _configure_observability(log_level: str) -> None:
    from tempwatch.observability import ObservabilityConfig, configure

    try:
        configure(ObservabilityConfig(log_level=log_level))
    except ValueError as e:
        handle_error(str(e))


async def _poll_loop(monitor: ThresholdMonitor, count: int, interval: float) -> int:
    """Poll count times; returns how many readings were accepted.

    Bad readings and failed reads are reported and skipped. If no poll
    succeeds at all, the last SourceError is raised.
    """
    accepted = 0
    last_error: SourceError | None = None
    for i in range(count):
        try:
            await monitor.poll()
        except InvalidSample as e:
            typer.echo(f"Skipping reading: {e}", err=True)
        except SourceError as e:
            last_error = e
            typer.echo(f"Read failed: {e}", err=True)
        else:
            accepted += 1
        if interval > 0 and i < count - 1:
            await asyncio.sleep(interval)
    if accepted == 0 and last_error is not None:
        raise last_error
    return accepted


def run(
    threshold: list[str] = typer.Option(
        None, "--threshold", "-t", help="TARGET[:MARGIN[:DIRECTION]], repeatable"
    ),
    readings: str = typer.Option(
        None, "--readings", "-r", help="Comma-separated readings to replay (°C)"
    ),
    sensor: Path = typer.Option(None, "--sensor", help="hwmon temp*_input file to poll"),
    config_path: Path = typer.Option(None, "--config", "-c", help="Monitor YAML config"),
    count: int = typer.Option(10, "--count", "-n", min=1, help="Number of polls"),
    interval: float = typer.Option(
        None, "--interval", "-i", min=0, help="Seconds between polls (default from config)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print alerts as JSON lines"),
    show_readings: bool = typer.Option(
        False, "--show-readings", help="Also print every accepted reading"
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Structured log level"),
) -> None:
    """Poll a temperature source and print threshold alerts.

    With no thresholds given, watches 0°C (both ways) and 100°C (rising).
    With no source given, replays a demo sequence around freezing.

    Examples:
        tempwatch run --interval 0
        tempwatch run -t 10:0.5:up --readings=9,10.2,12,9.8,10.3 -n 5 -i 0
        tempwatch run --sensor /sys/class/hwmon/hwmon0/temp1_input -t 80:2:up
    """
    try:
        cfg = MonitorConfig.load(config_path)
    except InvalidConfiguration as e:
        handle_error(str(e))

    thresholds = _thresholds_from_options(threshold) or cfg.thresholds
    if not thresholds:
        thresholds = [Threshold(t, m, d) for t, m, d in DEMO_THRESHOLDS]
    cfg.thresholds = thresholds
    if readings is not None:
        cfg.readings = parse_readings(readings)
    if sensor is not None:
        cfg.sensor_path = str(sensor)

    _configure_observability(log_level)

    monitor = cfg.build_monitor()
    monitor.subscribe(ThresholdCrossed, _print_alert_json if as_json else _print_alert)
    if show_readings:
        monitor.subscribe(SampleIngested, _print_reading)

    wait = cfg.poll_interval if interval is None else interval
    try:
        asyncio.run(_poll_loop(monitor, count, wait))
    except SourceError as e:
        handle_error(str(e))


def check(
    readings: str = typer.Option(
        ..., "--readings", "-r", help="Comma-separated readings in order (°C)"
    ),
    threshold: list[str] = typer.Option(
        None, "--threshold", "-t", help="TARGET[:MARGIN[:DIRECTION]], repeatable"
    ),
    config_path: Path = typer.Option(None, "--config", "-c", help="Monitor YAML config"),
) -> None:
    """Evaluate a fixed sequence of readings offline and print the alerts.

    Example:
        tempwatch check -t 0:0.5:both --readings=1.5,1.0,0.5,0.0,-0.5,0.0
    """
    thresholds = _thresholds_from_options(threshold)
    if not thresholds and config_path is not None:
        try:
            thresholds = MonitorConfig.load(config_path).thresholds
        except InvalidConfiguration as e:
            handle_error(str(e))
    if not thresholds:
        handle_error("No thresholds defined. Pass --threshold or --config.")

    monitor = ThresholdMonitor(thresholds=thresholds)
    alerts: list[ThresholdCrossed] = []
    monitor.subscribe(ThresholdCrossed, alerts.append)
    monitor.subscribe(ThresholdCrossed, _print_alert)

    accepted = 0
    for value in parse_readings(readings):
        try:
            monitor.ingest_sample(value)
        except InvalidSample as e:
            typer.echo(f"Skipping reading: {e}", err=True)
            continue
        accepted += 1

    typer.echo(f"{len(alerts)} alert(s) from {accepted} reading(s)")
