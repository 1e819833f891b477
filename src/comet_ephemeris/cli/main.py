"""CLI entry point: comet-ephemeris state|ephemeris|plot subcommands."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import NoReturn

from comet_ephemeris.comets import parse_comet
from comet_ephemeris.elements import CometElements
from comet_ephemeris.ephemeris import COLUMN_NAMES, EphemerisParams, generate_ephemeris, parse_column_spec
from comet_ephemeris.kinematics import OrbitKinematics
from comet_ephemeris.rendering.orbit_plot import draw_orbit
from comet_ephemeris.report import write_elements_summary, write_state_report
from comet_ephemeris.time_utils import jd_from_string

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --verbose or COMET_EPHEMERIS_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = os.environ.get('COMET_EPHEMERIS_LOG', '').upper()
    if env_level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )
    # matplotlib is chatty at DEBUG (font manager).
    logging.getLogger('matplotlib').setLevel(logging.WARNING)


def _elements_from_args(args: argparse.Namespace) -> CometElements:
    """Build the element set from --comet or the individual element options.

    Raises:
        ValueError: Missing or invalid elements.
    """
    if args.comet:
        return parse_comet(args.comet)
    required = {
        '--e': args.e,
        '--q': args.q,
        '--perihelion-date': args.perihelion_date,
    }
    missing = [flag for flag, value in required.items() if value is None]
    if missing:
        raise ValueError(f'Give --comet or the orbital elements (missing: {", ".join(missing)})')
    return CometElements.from_dates(
        name=args.name,
        eccentricity=args.e,
        perihelion_distance=args.q,
        inclination_deg=args.i,
        node_deg=args.node,
        arg_perihelion_deg=args.peri,
        perihelion_date=args.perihelion_date,
        epoch_date=args.epoch,
        parabolic=args.parabolic,
    )


def _add_element_arguments(parser: argparse.ArgumentParser) -> None:
    """Orbital element options shared by all subcommands."""
    parser.add_argument('--comet', type=str, default=None, help='Built-in comet (halley, encke, hale-bopp, oumuamua)')
    parser.add_argument('--name', type=str, default='Comet', help='Name shown in reports')
    parser.add_argument('--e', type=float, default=None, help='Eccentricity')
    parser.add_argument('--q', type=float, default=None, help='Perihelion distance (AU)')
    parser.add_argument('--i', type=float, default=0.0, help='Inclination (deg)')
    parser.add_argument('--node', type=float, default=0.0, help='Longitude of ascending node (deg)')
    parser.add_argument('--peri', type=float, default=0.0, help='Argument of perihelion (deg)')
    parser.add_argument('--perihelion-date', type=str, default=None, help='Perihelion passage date/time')
    parser.add_argument('--epoch', type=str, default=None, help='Osculation epoch (default: perihelion date)')
    parser.add_argument('--parabolic', action='store_true', help='Tag the orbit as parabolic (requires --e 1)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')


def _state_cmd(args: argparse.Namespace) -> int:
    """Run the single-epoch state report (state subcommand)."""
    try:
        elements = _elements_from_args(args)
        kin = OrbitKinematics()
        if args.date:
            write_state_report(sys.stdout, elements, jd_from_string(args.date), kin)
        else:
            write_elements_summary(sys.stdout, elements, kin)
    except (ValueError, RuntimeError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    return 0


def _ephemeris_cmd(args: argparse.Namespace) -> int:
    """Run the ephemeris table generator (ephemeris subcommand)."""
    try:
        elements = _elements_from_args(args)
        params = EphemerisParams(
            elements=elements,
            start_jd=jd_from_string(args.start),
            stop_jd=jd_from_string(args.stop),
            interval=args.interval,
            time_unit=args.time_unit,
        )
        if args.columns:
            params.columns = parse_column_spec([str(c) for c in args.columns])
        if args.output is not None:
            with open(args.output, 'w') as f:
                generate_ephemeris(params, f)
        else:
            generate_ephemeris(params, sys.stdout)
    except (ValueError, RuntimeError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    return 0


def _plot_cmd(args: argparse.Namespace) -> int:
    """Draw the orbit diagram (plot subcommand)."""
    try:
        elements = _elements_from_args(args)
        jd = jd_from_string(args.date) if args.date else None
        draw_orbit(
            elements,
            jd,
            output_path=args.output,
            max_radius_au=args.max_radius,
            show_earth=not args.no_earth,
        )
    except (ValueError, RuntimeError, ImportError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for comet-ephemeris CLI (state | ephemeris | plot).

    Returns:
        Exit code 0 on success, 1 on failure.
    """
    parser = argparse.ArgumentParser(
        prog='comet-ephemeris',
        description='Two-body comet positions, velocities, and ephemeris tables.',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    state_parser = subparsers.add_parser('state', help='Elements and state at one date')
    _add_element_arguments(state_parser)
    state_parser.add_argument('--date', type=str, default=None, help='Date/time of the state (omit for elements only)')
    state_parser.set_defaults(func=_state_cmd)

    ephem_parser = subparsers.add_parser('ephemeris', help='Generate ephemeris table')
    _add_element_arguments(ephem_parser)
    ephem_parser.add_argument('--start', type=str, required=True, help='Start date/time')
    ephem_parser.add_argument('--stop', type=str, required=True, help='Stop date/time')
    ephem_parser.add_argument('--interval', type=float, default=1.0, help='Time step')
    ephem_parser.add_argument(
        '--time-unit',
        type=str,
        default='day',
        choices=['sec', 'min', 'hour', 'day'],
    )
    ephem_parser.add_argument(
        '--columns',
        type=str,
        nargs='*',
        default=None,
        help=f'Column IDs or names ({", ".join(COLUMN_NAMES)})',
    )
    ephem_parser.add_argument('-o', '--output', type=str, default=None, help='Output file (default stdout)')
    ephem_parser.set_defaults(func=_ephemeris_cmd)

    plot_parser = subparsers.add_parser('plot', help='Orbit diagram')
    _add_element_arguments(plot_parser)
    plot_parser.add_argument('--date', type=str, default=None, help='Date/time to mark on the orbit')
    plot_parser.add_argument('--max-radius', type=float, default=6.0, help='Track cut-off radius (AU)')
    plot_parser.add_argument('--no-earth', action='store_true', help="Omit Earth's orbit")
    plot_parser.add_argument('-o', '--output', type=str, required=True, help='Image file (e.g. orbit.png)')
    plot_parser.set_defaults(func=_plot_cmd)

    args = parser.parse_args(argv)
    _configure_logging(verbose=args.verbose)
    return int(args.func(args))


def cli_main() -> NoReturn:
    """Entry point for console_scripts; calls main() and exits with its return code."""
    sys.exit(main())


if __name__ == '__main__':
    sys.exit(main())
