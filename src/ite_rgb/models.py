"""Data models for ite-keyboard-rgb."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from ite_rgb.constants import LIGHTING_MODES, NUM_COLS, NUM_ROWS
from ite_rgb.exceptions import UnknownModeError


@dataclass(frozen=True, slots=True)
class RGB:
    """A single key color. Channels are 0-255."""

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue):
            if not 0 <= channel <= 255:
                msg = f"RGB channel out of range 0-255: {channel}"
                raise ValueError(msg)


BLACK = RGB(0, 0, 0)

# 6 rows x 21 columns, indexed matrix[row][column]
ColorMatrix = Sequence[Sequence[RGB]]


def blank_matrix() -> list[list[RGB]]:
    """Build an all-black matrix that callers can fill in."""
    return [[BLACK] * NUM_COLS for _ in range(NUM_ROWS)]


def validate_matrix(matrix: ColorMatrix) -> None:
    """Check that *matrix* is a full 6x21 grid of RGB values.

    Raises:
        ValueError: If a dimension is wrong or an entry is not an RGB.
    """
    if len(matrix) != NUM_ROWS:
        msg = f"Color matrix must have exactly {NUM_ROWS} rows, got {len(matrix)}"
        raise ValueError(msg)
    for index, row in enumerate(matrix):
        if len(row) != NUM_COLS:
            msg = (
                f"Row {index} must have exactly {NUM_COLS} columns, "
                f"got {len(row)}"
            )
            raise ValueError(msg)
        if not all(isinstance(color, RGB) for color in row):
            msg = f"Row {index} contains a value that is not an RGB"
            raise ValueError(msg)


class LightingMode(Enum):
    """Built-in lighting animations of the keyboard firmware."""

    OFF = "off"
    FADE = "fade"
    WAVE = "wave"
    DOTS = "dots"
    RAINBOW = "rainbow"
    EXPLOSION = "explosion"
    SNAKE = "snake"
    RAINDROPS = "raindrops"

    @classmethod
    def from_name(cls, name: str) -> "LightingMode":
        """Look up a mode by name, ignoring case and surrounding whitespace.

        Raises:
            UnknownModeError: If *name* is not a lighting mode.
        """
        normalized = name.strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            raise UnknownModeError(normalized) from None

    @property
    def frame(self) -> bytes:
        """The 8-byte command frame selecting this mode."""
        return LIGHTING_MODES[self.value]


class ModeOutcome(Enum):
    """Terminal state of a single set_mode call."""

    SET = "set"
    REJECTED = "rejected"
    TRANSFER_FAILED = "transfer_failed"


@dataclass(frozen=True, slots=True)
class ModeReport:
    """Result of switching the lighting mode."""

    mode: str
    outcome: ModeOutcome
    message: str

    @property
    def ok(self) -> bool:
        return self.outcome is ModeOutcome.SET


@dataclass(frozen=True, slots=True)
class RowReport:
    """Result of sending one row of the color matrix.

    ``control_bytes`` is None when the row-select transfer failed, in which
    case no payload was attempted. ``payload_bytes`` is None when the payload
    was not written.
    """

    row: int
    control_bytes: int | None = None
    payload_bytes: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        """Human-readable status line for this row."""
        if self.control_bytes is None:
            return f"row {self.row:2}: could not set color: {self.error}"
        line = f"row {self.row:2}: ctrl ok ({self.control_bytes} bytes)"
        if self.payload_bytes is None:
            return f'{line}, data write failure "{self.error}"'
        return f"{line}, data ok ({self.payload_bytes} bytes)"


@dataclass(frozen=True, slots=True)
class ColorReport:
    """Result of sending a full color matrix."""

    endpoint: int
    rows: tuple[RowReport, ...]

    @property
    def ok(self) -> bool:
        return all(row.ok for row in self.rows)

    @property
    def failed_rows(self) -> tuple[int, ...]:
        return tuple(row.row for row in self.rows if not row.ok)

    @property
    def messages(self) -> tuple[str, ...]:
        return tuple(row.message for row in self.rows)
