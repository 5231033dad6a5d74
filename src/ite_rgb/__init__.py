"""ITE keyboard RGB - Backlight control for the ITE 048d:ce00 keyboard.

This package switches the keyboard's built-in lighting animations and
sets per-key colors over raw USB.

Example:
    from ite_rgb import RGB, blank_matrix, open_keyboard, set_colors, set_mode

    with open_keyboard() as session:
        set_mode(session, "rainbow")

    matrix = blank_matrix()
    matrix[0] = [RGB(255, 0, 0)] * 21
    with open_keyboard() as session:
        set_colors(session, matrix)
"""

__version__ = "1.0.0"

from ite_rgb.colors import color_names, get_color
from ite_rgb.constants import NUM_COLS, NUM_ROWS, PRODUCT_ID, VENDOR_ID
from ite_rgb.device import (
    KeyboardSession,
    find_keyboard,
    list_devices,
    open_keyboard,
)
from ite_rgb.endpoints import iter_endpoints, resolve_out_endpoint
from ite_rgb.exceptions import (
    ClaimFailedError,
    DeviceCommunicationError,
    DeviceNotFoundError,
    EndpointNotFoundError,
    ITERGBError,
    OpenFailedError,
    RangeError,
    SetupFailedError,
    TransferError,
    UnknownColorError,
    UnknownModeError,
)
from ite_rgb.lighting import set_colors, set_mode
from ite_rgb.models import (
    RGB,
    ColorReport,
    LightingMode,
    ModeOutcome,
    ModeReport,
    RowReport,
    blank_matrix,
)
from ite_rgb.ranges import parse_range

__all__ = [
    "NUM_COLS",
    "NUM_ROWS",
    "PRODUCT_ID",
    "RGB",
    "VENDOR_ID",
    "ClaimFailedError",
    "ColorReport",
    "DeviceCommunicationError",
    "DeviceNotFoundError",
    "EndpointNotFoundError",
    "ITERGBError",
    "KeyboardSession",
    "LightingMode",
    "ModeOutcome",
    "ModeReport",
    "OpenFailedError",
    "RangeError",
    "RowReport",
    "SetupFailedError",
    "TransferError",
    "UnknownColorError",
    "UnknownModeError",
    "__version__",
    "blank_matrix",
    "color_names",
    "find_keyboard",
    "get_color",
    "iter_endpoints",
    "list_devices",
    "open_keyboard",
    "parse_range",
    "resolve_out_endpoint",
    "set_colors",
    "set_mode",
]
