"""Row and column range expressions.

Accepted forms, combinable with commas::

    3           a single index
    0,2,4       a list of indices
    5-17        an inclusive span
    0-2,17,18   spans and indices mixed
    all         every index from 0 to the maximum
"""

from ite_rgb.exceptions import RangeError


def parse_range(text: str, maximum: int) -> list[int]:
    """Expand a range expression into the indices it names.

    Indices come back in the order written; repeats are kept.

    Args:
        text: The expression, e.g. ``"0-2,17,18"``. Case-insensitive.
        maximum: Highest valid index (inclusive).

    Returns:
        List of indices.

    Raises:
        RangeError: If the expression is malformed, a span is reversed, or
            an index exceeds *maximum*.
    """
    indices: list[int] = []
    for item in text.lower().split(","):
        item = item.strip()
        if item == "all":
            indices.extend(range(maximum + 1))
            continue

        start_text, dash, end_text = item.partition("-")
        start = _parse_index(start_text, text)
        end = _parse_index(end_text, text) if dash else start

        if end < start:
            msg = f"Reversed range '{item}' in '{text}'"
            raise RangeError(msg)
        if end > maximum:
            msg = f"Index {end} out of range 0-{maximum} in '{text}'"
            raise RangeError(msg)
        indices.extend(range(start, end + 1))
    return indices


def _parse_index(value: str, text: str) -> int:
    value = value.strip()
    if not value.isdecimal():
        msg = f"Invalid range '{text}'"
        raise RangeError(msg)
    return int(value)
