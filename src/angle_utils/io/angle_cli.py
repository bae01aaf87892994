"""Define a command-line interface to convert, normalize, and compare angles."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict

import click
import numpy as np
from rich.table import Table

from angle_utils.io.angle_config import load_angle_config
from angle_utils.io.logging import configure_logging, console, log_debug
from angle_utils.math.angles import Angle

ANGLE_CONSTRUCTORS: Dict[str, Callable[..., Angle]] = {
    "rad": Angle.from_radians,
    "deg": Angle.from_degrees,
    "cycles": Angle.from_cycles,
}
"""Map from unit names to the constructors creating angles in those units."""

PRECISIONS = {"32": np.float32, "64": np.float64}

# Negative numbers (e.g., -10) are arguments, not options
NUMERIC_ARGS = {"ignore_unknown_options": True}


def build_angle(value: float, unit: str, float_type: Any = np.float64) -> Angle:
    """Construct an angle from a number expressed in the named unit.

    :param value: Magnitude of the angle in the given unit
    :param unit: Name of the unit ("rad", "deg", or "cycles")
    :param float_type: Precision of the constructed angle (defaults to np.float64)
    :return: Constructed angle
    """
    if unit not in ANGLE_CONSTRUCTORS:
        raise ValueError(f"Unknown angle unit '{unit}'; expected: {sorted(ANGLE_CONSTRUCTORS)}")
    return ANGLE_CONSTRUCTORS[unit](value, float_type=float_type)


def angle_table(angle: Angle, title: str) -> Table:
    """Create a table displaying an angle in every supported unit."""
    table = Table(title=title, border_style="cyan", title_style="bold cyan")
    table.add_column("Unit", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("radians", repr(float(angle.as_radians())))
    table.add_row("degrees", repr(float(angle.as_degrees())))
    table.add_row("cycles", repr(float(angle.as_cycles())))
    return table


unit_option = click.option(
    "--unit",
    type=click.Choice(sorted(ANGLE_CONSTRUCTORS)),
    default="rad",
    show_default=True,
    help="Unit of the given value.",
)


@click.group()
@click.option("--verbose", is_flag=True, help="Show debug log messages.")
def cli(verbose: bool) -> None:
    """Convert, normalize, and compare planar angles."""
    configure_logging(verbose)


@cli.command(context_settings=NUMERIC_ARGS)
@click.argument("value", type=float)
@unit_option
@click.option("--precision", type=click.Choice(sorted(PRECISIONS)), default="64", show_default=True)
@click.option(
    "--normalize",
    type=click.Choice(["none", "zero", "positive"]),
    default="none",
    show_default=True,
    help="Wrap into [-pi, pi) ('zero') or [0, 2*pi) ('positive').",
)
def convert(value: float, unit: str, precision: str, normalize: str) -> None:
    """Display an angle given in one unit in radians, degrees, and cycles."""
    angle = build_angle(value, unit, PRECISIONS[precision])
    log_debug(f"Constructed {angle} from {value} {unit}")

    if normalize == "zero":
        angle.normalize_around_zero()
    elif normalize == "positive":
        angle.normalize_as_positive()

    title = f"{value} {unit} (float{precision}, normalize: {normalize})"
    console.print(angle_table(angle, title))


@cli.command(context_settings=NUMERIC_ARGS)
@click.argument("config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("name")
@click.argument("value", type=float)
@unit_option
def check(config_path: Path, name: str, value: float, unit: str) -> None:
    """Check whether a named angle from a YAML config matches the given value.

    Exits with status 1 if the angles differ under the config's tolerance.
    """
    config = load_angle_config(config_path)
    if name not in config.angles:
        raise click.BadParameter(f"No angle named '{name}' in {config_path}", param_hint="NAME")
    angle = build_angle(value, unit, config.float_type)

    if config.matches(name, angle):
        console.print(f"[green]'{name}' matches {value} {unit}[/green]")
        return

    expected_deg = float(config[name].as_degrees())
    console.print(f"[red]'{name}' ({expected_deg!r} deg) does not match {value} {unit}[/red]")
    click.get_current_context().exit(1)


if __name__ == "__main__":
    cli()
