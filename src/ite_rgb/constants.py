"""Constants for ITE keyboard backlight communication."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

# ITE Tech. Inc. USB Vendor ID
VENDOR_ID: Final[int] = 0x048D

# Per-key RGB keyboard controller
PRODUCT_ID: Final[int] = 0xCE00

# Keyboard matrix dimensions
NUM_ROWS: Final[int] = 6
NUM_COLS: Final[int] = 21

# HID SET_REPORT (class request, interface recipient, host-to-device)
REQUEST_TYPE: Final[int] = 0x21
REQUEST: Final[int] = 0x09
VALUE: Final[int] = 0x300

# Frame and payload sizes (in bytes)
FRAME_SIZE: Final[int] = 8
PAYLOAD_SIZE: Final[int] = 64

# Sent before every mode or color operation
SETUP_COMMAND: Final[bytes] = bytes([0x08, 0x02, 0x33, 0x00, 0x24, 0x00, 0x00, 0x00])

# Row-select frame: 16 00 <row> 00 00 00 00 00
ROW_SELECT_OPCODE: Final[int] = 0x16
ROW_SELECT_ROW_OFFSET: Final[int] = 2

# Pixel payload layout: one byte per column for each channel
PAYLOAD_BLUE_OFFSET: Final[int] = 0
PAYLOAD_GREEN_OFFSET: Final[int] = 21
PAYLOAD_RED_OFFSET: Final[int] = 42
PAYLOAD_COLUMNS: Final[int] = 20  # Column 20 has no slot in the firmware layout

# Transfer timeouts (milliseconds)
SETUP_TIMEOUT_MS: Final[int] = 2000
MODE_TIMEOUT_MS: Final[int] = 500
ROW_TIMEOUT_MS: Final[int] = 500
PAYLOAD_TIMEOUT_MS: Final[int] = 500

# Built-in lighting animations, keyed by lowercase name
LIGHTING_MODES: Final[Mapping[str, bytes]] = MappingProxyType(
    {
        "off": bytes([0x08, 0x02, 0x03, 0x05, 0x00, 0x08, 0x01, 0x00]),
        "fade": bytes([0x08, 0x02, 0x02, 0x05, 0x32, 0x08, 0x00, 0x00]),
        "wave": bytes([0x08, 0x02, 0x03, 0x05, 0x32, 0x08, 0x00, 0x00]),
        "dots": bytes([0x08, 0x02, 0x04, 0x05, 0x32, 0x08, 0x00, 0x00]),
        "rainbow": bytes([0x08, 0x02, 0x05, 0x05, 0x32, 0x08, 0x00, 0x00]),
        "explosion": bytes([0x08, 0x02, 0x06, 0x05, 0x32, 0x08, 0x00, 0x00]),
        "snake": bytes([0x08, 0x02, 0x09, 0x05, 0x32, 0x08, 0x00, 0x00]),
        "raindrops": bytes([0x08, 0x02, 0x0A, 0x05, 0x32, 0x08, 0x00, 0x00]),
    }
)
