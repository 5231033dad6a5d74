"""Lighting mode and per-key color control.

Both operations start with the SETUP frame. If the keyboard rejects it,
the operation stops there. Color updates then go row by row, and a failed
row does not stop the rows after it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ite_rgb.constants import (
    MODE_TIMEOUT_MS,
    NUM_ROWS,
    PAYLOAD_TIMEOUT_MS,
    ROW_TIMEOUT_MS,
    SETUP_COMMAND,
    SETUP_TIMEOUT_MS,
)
from ite_rgb.exceptions import (
    EndpointNotFoundError,
    SetupFailedError,
    TransferError,
    UnknownModeError,
)
from ite_rgb.models import (
    ColorReport,
    ModeOutcome,
    ModeReport,
    RowReport,
    validate_matrix,
)
from ite_rgb.protocol import encode_row, mode_frame, row_select_frame

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ite_rgb.device import KeyboardSession
    from ite_rgb.models import RGB, ColorMatrix

logger = logging.getLogger(__name__)


def _send_setup(session: KeyboardSession) -> None:
    try:
        session.control_write(SETUP_COMMAND, SETUP_TIMEOUT_MS)
    except TransferError as e:
        msg = f"could not init: {e}"
        logger.error("%s", msg)
        raise SetupFailedError(msg) from e


def set_mode(session: KeyboardSession, mode: str) -> ModeReport:
    """Switch the keyboard to one of its built-in lighting animations.

    Args:
        session: An open keyboard session.
        mode: Lighting mode name, case-insensitive.

    Returns:
        A ModeReport. Unknown names and a failed mode transfer are reported
        there; the session stays usable in every case.

    Raises:
        SetupFailedError: If the SETUP frame is rejected. No mode frame is
            sent.
    """
    _send_setup(session)

    name = mode.strip().lower()
    try:
        frame = mode_frame(name)
    except UnknownModeError as e:
        logger.warning("%s", e)
        return ModeReport(mode=name, outcome=ModeOutcome.REJECTED, message=str(e))

    logger.info("Setting mode %s", name)
    try:
        written = session.control_write(frame, MODE_TIMEOUT_MS)
    except TransferError as e:
        message = f"Could not set mode {name}: {e}"
        logger.warning("%s", message)
        return ModeReport(
            mode=name, outcome=ModeOutcome.TRANSFER_FAILED, message=message
        )

    message = f"Mode {name} set ({written} bytes)"
    logger.info("%s", message)
    return ModeReport(mode=name, outcome=ModeOutcome.SET, message=message)


def set_colors(session: KeyboardSession, matrix: ColorMatrix) -> ColorReport:
    """Send a full 6x21 color matrix to the keyboard.

    Args:
        session: An open keyboard session.
        matrix: Key colors indexed ``matrix[row][column]``. Not modified.

    Returns:
        A ColorReport with one RowReport per row, in row order.

    Raises:
        ValueError: If the matrix is not 6x21 RGB values. Nothing is sent.
        SetupFailedError: If the SETUP frame is rejected.
        EndpointNotFoundError: If the device has no OUT endpoint. No row is
            sent.
    """
    validate_matrix(matrix)
    _send_setup(session)

    endpoint = session.out_endpoint
    if endpoint is None:
        error = EndpointNotFoundError()
        logger.error("%s", error)
        raise error

    rows = tuple(
        _send_row(session, endpoint, row, matrix[row]) for row in range(NUM_ROWS)
    )
    return ColorReport(endpoint=endpoint, rows=rows)


def _send_row(
    session: KeyboardSession, endpoint: int, row: int, colors: Sequence[RGB]
) -> RowReport:
    try:
        control_bytes = session.control_write(row_select_frame(row), ROW_TIMEOUT_MS)
    except TransferError as e:
        report = RowReport(row=row, error=str(e))
        logger.warning("%s", report.message)
        return report

    try:
        payload_bytes = session.payload_write(
            endpoint, encode_row(colors), PAYLOAD_TIMEOUT_MS
        )
    except TransferError as e:
        report = RowReport(row=row, control_bytes=control_bytes, error=str(e))
        logger.warning("%s", report.message)
        return report

    report = RowReport(
        row=row, control_bytes=control_bytes, payload_bytes=payload_bytes
    )
    logger.info("%s", report.message)
    return report
