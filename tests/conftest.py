"""Pytest configuration and fixtures."""

from __future__ import annotations

from types import SimpleNamespace
from typing import TYPE_CHECKING
from unittest.mock import MagicMock, patch

import pytest
import usb.core

from ite_rgb.exceptions import TransferError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator


class FakeInterface(list):
    """Interface descriptor: iterable over its endpoints."""

    def __init__(
        self, number: int, alt_setting: int, addresses: Iterable[int]
    ) -> None:
        super().__init__(SimpleNamespace(bEndpointAddress=a) for a in addresses)
        self.bInterfaceNumber = number
        self.bAlternateSetting = alt_setting


class FakeDescriptorDevice:
    """Device exposing only a descriptor tree, indexed by configuration."""

    def __init__(
        self,
        configurations: list[list[FakeInterface]],
        unreadable: Iterable[int] = (),
    ) -> None:
        self._configurations = configurations
        self._unreadable = set(unreadable)
        self.bNumConfigurations = len(configurations)

    def __getitem__(self, index: int) -> list[FakeInterface]:
        if index in self._unreadable:
            raise usb.core.USBError("Entity not found")
        return self._configurations[index]


class RecordingSession:
    """Stand-in for KeyboardSession that records every transfer.

    Control transfers whose frame is in *fail_frames* and payload writes
    whose position (0-based, among payload writes) is in *fail_payloads*
    raise TransferError.
    """

    def __init__(
        self,
        endpoint: int | None = 0x02,
        fail_frames: Iterable[bytes] = (),
        fail_payloads: Iterable[int] = (),
    ) -> None:
        self.interface = 1
        self.out_endpoint = endpoint
        self.transfers: list[tuple] = []
        self._fail_frames = {bytes(f) for f in fail_frames}
        self._fail_payloads = set(fail_payloads)
        self._payload_count = 0

    @property
    def controls(self) -> list[bytes]:
        return [t[1] for t in self.transfers if t[0] == "control"]

    @property
    def payloads(self) -> list[bytes]:
        return [t[2] for t in self.transfers if t[0] == "payload"]

    def control_write(self, frame: bytes, timeout_ms: int) -> int:
        self.transfers.append(("control", bytes(frame), timeout_ms))
        if bytes(frame) in self._fail_frames:
            raise TransferError("Operation timed out")
        return len(frame)

    def payload_write(self, endpoint: int, payload: bytes, timeout_ms: int) -> int:
        index = self._payload_count
        self._payload_count += 1
        self.transfers.append(("payload", endpoint, bytes(payload), timeout_ms))
        if index in self._fail_payloads:
            raise TransferError("Pipe error")
        return len(payload)


@pytest.fixture
def make_descriptor_device() -> Callable[..., FakeDescriptorDevice]:
    """Factory for devices with a given descriptor tree."""
    return FakeDescriptorDevice


@pytest.fixture
def make_interface() -> Callable[..., FakeInterface]:
    """Factory for interface descriptors."""
    return FakeInterface


@pytest.fixture
def make_session() -> Callable[..., RecordingSession]:
    """Factory for recording sessions."""
    return RecordingSession


@pytest.fixture
def mock_usb_device() -> MagicMock:
    """Create a mock usb.core.Device for the keyboard."""
    device = MagicMock()
    device.idVendor = 0x048D
    device.idProduct = 0xCE00
    device.bus = 1
    device.address = 5
    device.get_active_configuration.return_value = SimpleNamespace(
        bConfigurationValue=1
    )
    device.is_kernel_driver_active.return_value = False
    device.ctrl_transfer.side_effect = lambda *args, **kwargs: len(args[4])
    device.write.side_effect = lambda endpoint, data, timeout=None: len(data)
    # One configuration: interface 1 with an IN endpoint then an OUT endpoint
    device.bNumConfigurations = 1
    configuration = [FakeInterface(1, 0, (0x81, 0x02))]
    device.__getitem__.side_effect = lambda index: [configuration][index]
    return device


@pytest.fixture
def mock_usb_util() -> Iterator[SimpleNamespace]:
    """Patch the pyusb interface helpers used by the session."""
    with (
        patch("usb.util.claim_interface") as claim,
        patch("usb.util.release_interface") as release,
        patch("usb.util.dispose_resources") as dispose,
    ):
        yield SimpleNamespace(claim=claim, release=release, dispose=dispose)
