"""Color name lookup."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from PIL import ImageColor

from ite_rgb.exceptions import UnknownColorError
from ite_rgb.models import RGB

# Names checked before falling back to Pillow. Values differ from CSS for
# "brown" (dark red here) and "darkblue" (navy).
COLORS: Final[Mapping[str, RGB]] = MappingProxyType(
    {
        "black": RGB(0x00, 0x00, 0x00),
        "aqua": RGB(0x00, 0xFF, 0xFF),
        "blue": RGB(0x00, 0x00, 0xFF),
        "fuchsia": RGB(0xFF, 0x00, 0xFF),
        "gray": RGB(0x80, 0x80, 0x80),
        "green": RGB(0x00, 0x80, 0x00),
        "lime": RGB(0x00, 0xFF, 0x00),
        "brown": RGB(0x80, 0x00, 0x00),
        "darkblue": RGB(0x00, 0x00, 0x80),
        "olive": RGB(0x80, 0x80, 0x00),
        "purple": RGB(0x80, 0x00, 0x80),
        "red": RGB(0xFF, 0x00, 0x00),
        "silver": RGB(0xC0, 0xC0, 0xC0),
        "teal": RGB(0x00, 0x80, 0x80),
        "white": RGB(0xFF, 0xFF, 0xFF),
        "yellow": RGB(0xFF, 0xFF, 0x00),
    }
)


def get_color(name: str) -> RGB:
    """Resolve a color name or ``#rrggbb`` string to RGB.

    Args:
        name: Color name (case-insensitive) or hex string.

    Raises:
        UnknownColorError: If the color cannot be resolved.
    """
    key = name.strip().lower()
    color = COLORS.get(key)
    if color is not None:
        return color

    try:
        red, green, blue = ImageColor.getrgb(key)[:3]
    except ValueError:
        raise UnknownColorError(name) from None
    return RGB(red, green, blue)


def color_names() -> list[str]:
    """Return the built-in color names, sorted."""
    return sorted(COLORS)
