# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "orbitjax"]
#
# [tool.uv.sources]
# orbitjax = { path = ".." }
# ///
"""Compute the data behind a heliocentric orbit diagram.

Takes a periapsis-based element set (as published for comets and
asteroids), samples the orbit, locates the body at the requested date and
lists the line of nodes and the planets whose orbits fit in the diagram.

Requires orbitjax to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/orbit_diagram.py [OPTIONS]

Examples:
    # Earth-like orbit, 100 days after periapsis
    uv run examples/orbit_diagram.py --qr 0.983 --ecc 0.0167 --inc 0.00005 \\
        --raan 174.9 --argp 288.1 --tp 2451547.5 --date 2000-04-13

    # Long-period comet, truncated to the sampling radius
    uv run examples/orbit_diagram.py --qr 40 --ecc 0.99 --max-range 50 --verbose
"""

import datetime
import enum
import logging
from typing import Annotated

import jax.numpy as jnp
import typer

from orbitjax import (
    MAX_RANGE,
    PLANET_ELEMENTS,
    OrbitalElements,
    TrajectoryConfig,
    calendar_from_julian_day,
    classify_orbit,
    julian_day_from_calendar,
    orbit_geometry,
    planet_state,
    planet_visible,
    sample_orbit,
    set_dtype,
)

set_dtype(jnp.float64)  # Must be before any JIT compilation


class Output(enum.StrEnum):
    summary = "summary"
    states = "states"


def _fmt(v) -> str:
    return "[" + ", ".join(f"{float(x):+.6f}" for x in v) + "]"


def main(
    qr: Annotated[float, typer.Option(help="Periapsis distance [AU]")] = 0.983,
    ecc: Annotated[float, typer.Option(help="Eccentricity")] = 0.0167,
    inc: Annotated[float, typer.Option(help="Inclination [deg]")] = 0.00005,
    raan: Annotated[float, typer.Option(help="Longitude of ascending node [deg]")] = 174.9,
    argp: Annotated[float, typer.Option(help="Argument of periapsis [deg]")] = 288.1,
    tp: Annotated[float, typer.Option(help="Periapsis epoch [Julian day]")] = 2451547.5,
    date: Annotated[
        str | None, typer.Option(help="Date of the body position (YYYY-MM-DD), default periapsis")
    ] = None,
    max_range: Annotated[float, typer.Option(help="Maximum range [AU]")] = MAX_RANGE,
    n_points: Annotated[int, typer.Option(help="Samples along the orbit")] = 360,
    output: Annotated[Output, typer.Option(help="What to print")] = Output.summary,
    verbose: Annotated[bool, typer.Option(help="Enable debug logging")] = False,
) -> None:
    """Sample an orbit and print the quantities needed to draw it."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    elements = OrbitalElements(qr, ecc, inc, raan, argp, tp)

    if date is None:
        jd = tp
    else:
        d = datetime.date.fromisoformat(date)
        jd = float(julian_day_from_calendar(d.year, d.month, d.day))

    traj = sample_orbit(elements, jd, TrajectoryConfig(max_range=max_range, n_points=n_points))

    if output is Output.states:
        for nu, s in zip(traj.true_anomaly, traj.states):
            print(f"{float(nu):10.4f} {_fmt(s)}")
        return

    info = classify_orbit(elements)
    print(f"── Orbit ({info.orbit_type}) ──")
    print(f"  Periapsis date:     {calendar_from_julian_day(tp).string}")
    if info.semi_major_axis is not None:
        print(f"  Semi-major axis:    {info.semi_major_axis:.6f} AU")
    if info.period is not None:
        print(f"  Period:             {info.period:.3f} days")
    print(f"  Periapsis speed:    {info.periapsis_speed:.6f} AU/day")
    if info.apoapsis_speed is not None:
        print(f"  Apoapsis speed:     {info.apoapsis_speed:.6f} AU/day")

    print(f"\n── Body at {calendar_from_julian_day(jd).string} ──")
    print(f"  State: {_fmt(traj.reference_state)}")
    if not bool(traj.reference_converged):
        print("  WARNING: propagation did not converge, position is approximate")

    lower, upper = (float(x) for x in traj.true_anomaly_bounds)
    print("\n── Diagram ──")
    print(f"  True anomaly range: [{lower:.3f}, {upper:.3f}] deg")
    if bool(traj.truncated):
        print("  Orbit truncated at the sampling radius")
    maxc = float(traj.maxc)
    print(f"  Display bound:      {maxc:.0f} AU")

    nodes = orbit_geometry(elements, maxc).line_of_nodes
    print(f"  Ascending node:     {_fmt(nodes.ascending_node)}"
          f"{'' if bool(nodes.ascending_valid) else ' (collapsed)'}")
    print(f"  Descending node:    {_fmt(nodes.descending_node)}"
          f"{'' if bool(nodes.descending_valid) else ' (collapsed)'}")

    print("\n── Planets ──")
    for name in PLANET_ELEMENTS:
        if planet_visible(name, maxc):
            print(f"  {name:<8} {_fmt(planet_state(name, jd)[:3])}")


if __name__ == "__main__":
    typer.run(main)
