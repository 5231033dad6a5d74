"""Keyboard discovery and USB session management."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Self

import usb.core
import usb.util

from ite_rgb.constants import (
    FRAME_SIZE,
    PAYLOAD_SIZE,
    PRODUCT_ID,
    REQUEST,
    REQUEST_TYPE,
    VALUE,
    VENDOR_ID,
)
from ite_rgb.endpoints import resolve_out_endpoint
from ite_rgb.exceptions import (
    ClaimFailedError,
    DeviceCommunicationError,
    DeviceNotFoundError,
    OpenFailedError,
    TransferError,
)

if TYPE_CHECKING:
    from collections.abc import Generator, Iterable
    from types import TracebackType

logger = logging.getLogger(__name__)

# Errors pyusb raises while reading descriptors of a device
_DESCRIPTOR_ERRORS = (usb.core.USBError, ValueError, IndexError)


def _enumerate(devices: Iterable[Any] | None) -> Iterable[Any]:
    if devices is not None:
        return devices
    try:
        return list(usb.core.find(find_all=True) or ())
    except (usb.core.NoBackendError, usb.core.USBError) as e:
        msg = f"unable to enumerate usb devices: {e}"
        raise DeviceCommunicationError(msg) from e


def describe_device(device: Any) -> str:
    """Format a device the way ``lsusb`` does.

    Raises:
        usb.core.USBError: If the device descriptor cannot be read.
    """
    return (
        f"Bus {int(device.bus):03} Device {int(device.address):03} "
        f"ID {int(device.idVendor):04x}:{int(device.idProduct):04x}"
    )


def list_devices(devices: Iterable[Any] | None = None) -> list[str]:
    """Describe every USB device on the bus.

    Args:
        devices: Devices to describe. Defaults to enumerating the bus.

    Returns:
        One ``Bus BBB Device DDD ID vvvv:pppp`` line per readable device.

    Raises:
        DeviceCommunicationError: If the bus cannot be enumerated.
    """
    lines: list[str] = []
    for device in _enumerate(devices):
        try:
            lines.append(describe_device(device))
        except _DESCRIPTOR_ERRORS as e:
            logger.warning("Unable to get device descriptor: %s", e)
    return lines


def find_keyboard(
    devices: Iterable[Any] | None = None,
    vendor_id: int = VENDOR_ID,
    product_id: int = PRODUCT_ID,
) -> Any:
    """Find the keyboard among the devices on the bus.

    The device list is walked once and the first device matching both IDs
    wins. Enumeration order is decided by the platform. Devices whose
    descriptors cannot be read are skipped.

    Args:
        devices: Devices to search. Defaults to enumerating the bus.
        vendor_id: USB vendor ID to match.
        product_id: USB product ID to match.

    Returns:
        The matching usb.core.Device.

    Raises:
        DeviceNotFoundError: If no device matches.
        DeviceCommunicationError: If the bus cannot be enumerated.
    """
    for device in _enumerate(devices):
        try:
            ids = (int(device.idVendor), int(device.idProduct))
        except _DESCRIPTOR_ERRORS as e:
            logger.warning("Unable to get device descriptor: %s", e)
            continue

        try:
            device[0]
        except _DESCRIPTOR_ERRORS as e:
            logger.warning(
                "Unable to get config descriptor of %04x:%04x: %s", ids[0], ids[1], e
            )
            continue

        if ids == (vendor_id, product_id):
            logger.info("Found keyboard: %s", describe_device(device))
            return device

    raise DeviceNotFoundError


class KeyboardSession:
    """Context manager owning an opened, claimed keyboard interface.

    On enter the active configuration value is read and used as the
    interface number, any kernel driver bound to it is detached, and the
    interface is claimed. On exit the interface is released, the kernel
    driver is reattached if this session detached it, and the handle is
    disposed, whether the block succeeded or not.

    Example:
        with KeyboardSession(find_keyboard()) as session:
            session.control_write(SETUP_COMMAND, SETUP_TIMEOUT_MS)
    """

    def __init__(self, device: Any, reattach_on_exit: bool = True) -> None:
        """Initialize the session wrapper.

        Args:
            device: The usb.core.Device to open.
            reattach_on_exit: Whether to give the interface back to the
                kernel driver when the session ends.
        """
        self._device = device
        self._reattach_on_exit = reattach_on_exit
        self._interface: int | None = None
        self._is_open = False
        self._claimed = False
        self._detached = False
        self._endpoint: int | None = None
        self._endpoint_resolved = False

    def __enter__(self) -> Self:
        """Open the device and claim its interface."""
        try:
            self._open()
        except BaseException:
            self.close()
            raise
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Release the interface and the handle."""
        self.close()

    @property
    def device(self) -> Any:
        """The raw USB handle. Only valid while the session is open."""
        return self._require_open()

    @property
    def interface(self) -> int:
        """The claimed interface number, used as wIndex for control transfers."""
        self._require_open()
        assert self._interface is not None
        return self._interface

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def out_endpoint(self) -> int | None:
        """The OUT endpoint for pixel payloads, resolved once per session."""
        device = self._require_open()
        if not self._endpoint_resolved:
            self._endpoint = resolve_out_endpoint(device)
            self._endpoint_resolved = True
            if self._endpoint is not None:
                logger.info("endpoint %d", self._endpoint)
        return self._endpoint

    def control_write(self, frame: bytes, timeout_ms: int) -> int:
        """Send an 8-byte frame as a SET_REPORT control transfer.

        Args:
            frame: The command frame.
            timeout_ms: Transfer timeout in milliseconds.

        Returns:
            Number of bytes written.

        Raises:
            TransferError: If the transfer fails.
            ValueError: If frame is not exactly 8 bytes.
        """
        if len(frame) != FRAME_SIZE:
            msg = f"Frame must be exactly {FRAME_SIZE} bytes, got {len(frame)}"
            raise ValueError(msg)
        device = self._require_open()
        try:
            written = device.ctrl_transfer(
                REQUEST_TYPE, REQUEST, VALUE, self._interface, frame, timeout=timeout_ms
            )
        except usb.core.USBError as e:
            raise TransferError(str(e)) from e
        return int(written)

    def payload_write(self, endpoint: int, payload: bytes, timeout_ms: int) -> int:
        """Write a 64-byte payload to an OUT endpoint.

        pyusb picks a bulk or interrupt transfer from the endpoint descriptor.

        Returns:
            Number of bytes written.

        Raises:
            TransferError: If the write fails.
            ValueError: If payload is not exactly 64 bytes.
        """
        if len(payload) != PAYLOAD_SIZE:
            msg = f"Payload must be exactly {PAYLOAD_SIZE} bytes, got {len(payload)}"
            raise ValueError(msg)
        device = self._require_open()
        try:
            written = device.write(endpoint, payload, timeout=timeout_ms)
        except usb.core.USBError as e:
            raise TransferError(str(e)) from e
        return int(written)

    def close(self) -> None:
        """Release everything this session acquired. Safe to call twice."""
        device = self._device
        try:
            if self._claimed:
                self._claimed = False
                try:
                    usb.util.release_interface(device, self._interface)
                except usb.core.USBError as e:
                    logger.warning("Failed to release interface: %s", e)
            if self._detached:
                self._detached = False
                if self._reattach_on_exit:
                    self._reattach_kernel_driver()
        finally:
            try:
                usb.util.dispose_resources(device)
            except usb.core.USBError as e:
                logger.warning("Failed to close device: %s", e)
            self._is_open = False

    def _open(self) -> None:
        try:
            configuration = self._device.get_active_configuration()
        except usb.core.USBError as e:
            msg = f"unable to open usb device: {e}"
            raise OpenFailedError(msg) from e

        # This keyboard exposes a single configuration whose value matches the
        # number of the interface that accepts lighting commands.
        interface = int(configuration.bConfigurationValue)
        logger.info("usb active configuration: %d", interface)
        self._interface = interface

        self._detach_kernel_driver(interface)

        try:
            usb.util.claim_interface(self._device, interface)
        except usb.core.USBError as e:
            msg = f"failed to claim interface {interface}: {e}"
            raise ClaimFailedError(msg) from e
        self._claimed = True
        self._is_open = True

    def _detach_kernel_driver(self, interface: int) -> None:
        try:
            active = self._device.is_kernel_driver_active(interface)
        except (NotImplementedError, usb.core.USBError) as e:
            logger.warning("Unable to check device state: %s", e)
            return
        if not active:
            return
        try:
            self._device.detach_kernel_driver(interface)
        except usb.core.USBError as e:
            logger.warning("Failed to detach device: %s", e)
            return
        self._detached = True
        logger.info("Kernel driver detached from interface %d", interface)

    def _reattach_kernel_driver(self) -> None:
        try:
            self._device.attach_kernel_driver(self._interface)
        except (NotImplementedError, usb.core.USBError) as e:
            logger.warning("Failed to reattach kernel driver: %s", e)
        else:
            logger.info("Kernel driver reattached to interface %d", self._interface)

    def _require_open(self) -> Any:
        if not self._is_open:
            msg = "Device not opened"
            raise DeviceCommunicationError(msg)
        return self._device


@contextmanager
def open_keyboard(
    devices: Iterable[Any] | None = None, reattach_on_exit: bool = True
) -> Generator[KeyboardSession]:
    """Find the keyboard and open a session on it.

    Args:
        devices: Devices to search. Defaults to enumerating the bus.
        reattach_on_exit: Whether to give the interface back to the kernel
            driver when the session ends.

    Yields:
        An opened KeyboardSession.

    Raises:
        DeviceNotFoundError: If the keyboard is not connected.
        OpenFailedError: If the device cannot be opened.
        ClaimFailedError: If the interface cannot be claimed.

    Example:
        with open_keyboard() as session:
            set_mode(session, "rainbow")
    """
    device = find_keyboard(devices)
    with KeyboardSession(device, reattach_on_exit=reattach_on_exit) as session:
        yield session
