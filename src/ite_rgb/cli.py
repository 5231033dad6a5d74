"""Command-line interface for ITE keyboard backlight control."""

import argparse
import logging
import os
import sys

from ite_rgb import __version__
from ite_rgb.colors import color_names, get_color
from ite_rgb.constants import NUM_COLS, NUM_ROWS
from ite_rgb.device import list_devices, open_keyboard
from ite_rgb.exceptions import DeviceNotFoundError, ITERGBError
from ite_rgb.lighting import set_colors, set_mode
from ite_rgb.models import RGB, LightingMode, blank_matrix
from ite_rgb.ranges import parse_range

MODE_NAMES = " | ".join(mode.value for mode in LightingMode)

# Epilog text for main parser
MAIN_EPILOG = f"""\
examples:
  ite-rgb mode snake                          starts snake mode
  ite-rgb color 0 all yellow                  yellow on row #0 keys
  ite-rgb color 0,5 all red 2-4 all white     red on rows 0 and 5,
                                              white on rows 2 to 4
  ite-rgb color 1,4-5 0-1,18-19 blue          blue for the first and last 2 keys
                                              of rows 1, 4 and 5
  ite-rgb list                                list USB devices

modes:
  {MODE_NAMES}

Use -h with any command for detailed help.
"""

COLOR_EPILOG = f"""\
ranges:
  single value:         3          row #3
  list of values:       0,2,4      rows 0, 2 and 4
  range of values:      5-17       columns from 5 to 17
  mixed list and range: 0-2,17,18  columns 0, 1, 2, 17 and 18
  all possible values:  all        rows 0 to {NUM_ROWS - 1}, columns 0 to {NUM_COLS - 1}

colors:
  {", ".join(color_names())}
  Other CSS color names and #rrggbb are accepted too.

Keys not named in any group are turned off (black). Later groups
overwrite earlier ones.
"""


def has_privileges() -> bool:
    """Return True when running with the rights needed to claim the device."""
    if os.name != "posix":
        return True
    return os.geteuid() == 0


def build_matrix(groups: list[str]) -> list[list[RGB]]:
    """Build a color matrix from ``ROWS COLS COLOR`` argument triples.

    Raises:
        ValueError: If *groups* is not a non-empty list of triples.
        RangeError: If a row or column range is invalid.
        UnknownColorError: If a color cannot be resolved.
    """
    if not groups or len(groups) % 3 != 0:
        msg = "Expected one or more ROWS COLS COLOR groups"
        raise ValueError(msg)

    matrix = blank_matrix()
    for index in range(0, len(groups), 3):
        rows = parse_range(groups[index], NUM_ROWS - 1)
        columns = parse_range(groups[index + 1], NUM_COLS - 1)
        color = get_color(groups[index + 2])
        for row in rows:
            for column in columns:
                matrix[row][column] = color
    return matrix


def _require_privileges() -> bool:
    if has_privileges():
        return True
    print("Error: This program requires root privileges.", file=sys.stderr)
    return False


def cmd_mode(args: argparse.Namespace) -> int:
    """Switch the keyboard's built-in lighting animation."""
    if not _require_privileges():
        return 1

    try:
        with open_keyboard() as session:
            report = set_mode(session, args.mode)
    except DeviceNotFoundError:
        print("Error: No compatible ITE keyboard found.", file=sys.stderr)
        return 1
    except ITERGBError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(report.message)
    return 0 if report.ok else 1


def cmd_color(args: argparse.Namespace) -> int:
    """Set per-key colors."""
    try:
        matrix = build_matrix(args.groups)
    except (ValueError, ITERGBError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not _require_privileges():
        return 1

    try:
        with open_keyboard() as session:
            report = set_colors(session, matrix)
    except DeviceNotFoundError:
        print("Error: No compatible ITE keyboard found.", file=sys.stderr)
        return 1
    except ITERGBError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for message in report.messages:
        print(message)
    return 0 if report.ok else 1


def cmd_list(args: argparse.Namespace) -> int:
    """List USB devices."""
    try:
        lines = list_devices()
    except ITERGBError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    """Main entry point with subcommands."""
    # Use RawDescriptionHelpFormatter to preserve epilog formatting
    parser = argparse.ArgumentParser(
        prog="ite-rgb",
        description="ITE 048d:ce00 keyboard backlight control.",
        epilog=MAIN_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="show transfer details (-vv for USB descriptors)",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="commands",
        metavar="<command>",
    )

    # mode subcommand
    mode_parser = subparsers.add_parser(
        "mode",
        help="start a built-in lighting animation",
        description=f"Start a built-in lighting animation.\nModes: {MODE_NAMES}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    mode_parser.add_argument("mode", metavar="MODE", help="lighting mode name")
    mode_parser.set_defaults(func=cmd_mode)

    # color subcommand
    color_parser = subparsers.add_parser(
        "color",
        help="set per-key colors",
        description="Set the color of each key by row and column ranges.",
        epilog=COLOR_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    color_parser.add_argument(
        "groups",
        nargs="+",
        metavar="GROUP",
        help="ROWS COLS COLOR, repeatable",
    )
    color_parser.set_defaults(func=cmd_color)

    # list subcommand
    list_parser = subparsers.add_parser(
        "list",
        help="list USB devices",
        description="List every USB device on the bus.",
    )
    list_parser.set_defaults(func=cmd_list)

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
