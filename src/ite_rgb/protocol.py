"""Command frame and pixel payload encoding.

Every control transfer carries a fixed 8-byte frame and every row of the
color matrix travels as a fixed 64-byte payload::

    payload[0:20]   blue,  one byte per column
    payload[21:41]  green, one byte per column
    payload[42:62]  red,   one byte per column

Bytes 20, 41, 62 and 63 are always zero. Channel values are written as-is.
"""

from collections.abc import Sequence

from ite_rgb.constants import (
    FRAME_SIZE,
    NUM_ROWS,
    PAYLOAD_BLUE_OFFSET,
    PAYLOAD_COLUMNS,
    PAYLOAD_GREEN_OFFSET,
    PAYLOAD_RED_OFFSET,
    PAYLOAD_SIZE,
    ROW_SELECT_OPCODE,
    ROW_SELECT_ROW_OFFSET,
)
from ite_rgb.models import RGB, LightingMode


def mode_frame(mode: LightingMode | str) -> bytes:
    """Return the command frame for a lighting mode.

    Args:
        mode: A LightingMode or its name (case-insensitive).

    Raises:
        UnknownModeError: If a name does not match any mode.
    """
    if not isinstance(mode, LightingMode):
        mode = LightingMode.from_name(mode)
    return mode.frame


def row_select_frame(row: int) -> bytes:
    """Return the frame announcing that the next payload is for *row*.

    Raises:
        ValueError: If *row* is outside 0-5.
    """
    if not 0 <= row < NUM_ROWS:
        msg = f"Row must be in range 0-{NUM_ROWS - 1}, got {row}"
        raise ValueError(msg)
    frame = bytearray(FRAME_SIZE)
    frame[0] = ROW_SELECT_OPCODE
    frame[ROW_SELECT_ROW_OFFSET] = row
    return bytes(frame)


def encode_row(colors: Sequence[RGB]) -> bytes:
    """Encode one row of the color matrix as a 64-byte pixel payload."""
    payload = bytearray(PAYLOAD_SIZE)
    for column, color in enumerate(colors[:PAYLOAD_COLUMNS]):
        payload[PAYLOAD_BLUE_OFFSET + column] = color.blue
        payload[PAYLOAD_GREEN_OFFSET + column] = color.green
        payload[PAYLOAD_RED_OFFSET + column] = color.red
    return bytes(payload)
