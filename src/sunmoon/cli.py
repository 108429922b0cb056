"""Command-line interface for sun and moon calculations."""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone

from pydantic import ValidationError

from sunmoon.astronomy.phase import get_moon_data
from sunmoon.astronomy.position import get_position
from sunmoon.astronomy.solver import get_moon_times, get_sun_times
from sunmoon.astronomy.transit import moon_transit
from sunmoon.config import get_settings
from sunmoon.errors import InvalidArgumentError
from sunmoon.models.location import Coordinates

logger = logging.getLogger(__name__)


def _parse_time(value: str | None) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    return datetime.fromisoformat(value)


def _format_ts(ts: float | None) -> str | None:
    if ts is None:
        return None
    return datetime.fromtimestamp(ts / 1000, tz=timezone.utc).isoformat(timespec="seconds")


def _sun_times(args: argparse.Namespace, coords: Coordinates) -> dict:
    settings = get_settings()
    times = get_sun_times(
        _parse_time(args.time),
        coords.latitude,
        coords.longitude,
        height=coords.height,
        include_deprecated=args.deprecated or settings.include_deprecated_names,
        in_utc=args.utc,
    )
    ordered = sorted(times.values(), key=lambda event: (event.pos, event.name))
    return {event.name: _format_ts(event.ts) for event in ordered}


def _moon_times(args: argparse.Namespace, coords: Coordinates) -> dict:
    times = get_moon_times(_parse_time(args.time), coords.latitude, coords.longitude, args.utc)
    return {
        "rise": _format_ts(times.rise.ts),
        "set": _format_ts(times.set.ts),
        "always_up": times.always_up,
        "always_down": times.always_down,
    }


def _transit(args: argparse.Namespace, coords: Coordinates) -> dict:
    times = get_moon_times(_parse_time(args.time), coords.latitude, coords.longitude, args.utc)
    result = moon_transit(times.rise.ts, times.set.ts, coords.latitude, coords.longitude, args.utc)
    return {"main": _format_ts(result.main), "invert": _format_ts(result.invert)}


def _position(args: argparse.Namespace, coords: Coordinates) -> dict:
    return get_position(_parse_time(args.time), coords.latitude, coords.longitude).model_dump()


def _moon(args: argparse.Namespace, coords: Coordinates) -> dict:
    data = get_moon_data(_parse_time(args.time), coords.latitude, coords.longitude)
    return data.model_dump(mode="json")


COMMANDS = {
    "position": _position,
    "sun-times": _sun_times,
    "moon-times": _moon_times,
    "moon": _moon,
    "transit": _transit,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sun & Moon - positions, rise/set/twilight times and moon phases"
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "location",
        help="Observer coordinates as 'lat,lon' (e.g. 50.5,30.5)",
    )
    common.add_argument(
        "--time",
        help="ISO 8601 instant (default: now); naive values are UTC",
    )
    common.add_argument(
        "--utc",
        action="store_true",
        help="Use UTC days instead of the configured civil timezone",
    )

    subparsers.add_parser("position", parents=[common], help="Sun azimuth and altitude")

    sun_parser = subparsers.add_parser(
        "sun-times", parents=[common], help="Sunrise, sunset and twilight times"
    )
    sun_parser.add_argument(
        "--height",
        type=float,
        default=None,
        help="Observer height in meters",
    )
    sun_parser.add_argument(
        "--deprecated",
        action="store_true",
        help="Also list events under their deprecated names",
    )

    subparsers.add_parser("moon-times", parents=[common], help="Moonrise and moonset")
    subparsers.add_parser("moon", parents=[common], help="Moon position and illumination")
    subparsers.add_parser("transit", parents=[common], help="Moon meridian transit")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        height = getattr(args, "height", None)
        coords = Coordinates.from_string(
            args.location,
            height=settings.default_height_m if height is None else height,
        )
        result = COMMANDS[args.command](args, coords)
    except (ValueError, ValidationError, InvalidArgumentError) as exc:
        logger.debug(f"Command {args.command} failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
