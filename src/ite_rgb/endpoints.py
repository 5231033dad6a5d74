"""Endpoint discovery over a device's descriptor tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import usb.core
import usb.util

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EndpointLocation:
    """Where an endpoint descriptor sits in the descriptor tree."""

    configuration: int
    interface: int
    alt_setting: int
    endpoint: Any  # usb.core.Endpoint

    @property
    def address(self) -> int:
        return int(self.endpoint.bEndpointAddress)

    @property
    def number(self) -> int:
        return usb.util.endpoint_address(self.address)

    @property
    def is_out(self) -> bool:
        return usb.util.endpoint_direction(self.address) == usb.util.ENDPOINT_OUT


def iter_endpoints(device: Any) -> Iterator[EndpointLocation]:
    """Walk every endpoint of *device* in descriptor order.

    Configurations are visited by index (0..bNumConfigurations), then the
    interface descriptors of each (one per alternate setting), then their
    endpoints. A configuration whose descriptor cannot be read is skipped.

    Args:
        device: A usb.core.Device, or anything indexable by configuration
            index that exposes ``bNumConfigurations``.

    Yields:
        EndpointLocation for each endpoint descriptor.
    """
    for index in range(device.bNumConfigurations):
        try:
            configuration = device[index]
        except (usb.core.USBError, IndexError) as e:
            logger.warning("Unable to read configuration %d: %s", index, e)
            continue

        for interface in configuration:
            for endpoint in interface:
                yield EndpointLocation(
                    configuration=index,
                    interface=int(interface.bInterfaceNumber),
                    alt_setting=int(interface.bAlternateSetting),
                    endpoint=endpoint,
                )


def resolve_out_endpoint(device: Any) -> int | None:
    """Find the first OUT endpoint in descriptor order.

    This is a first-match policy: no interface or alternate setting is
    preferred over another beyond descriptor order.

    Returns:
        The endpoint number, or None if the device has no OUT endpoint.
    """
    for location in iter_endpoints(device):
        if location.is_out:
            logger.debug(
                "OUT endpoint 0x%02x (configuration %d, interface %d, alt %d)",
                location.address,
                location.configuration,
                location.interface,
                location.alt_setting,
            )
            return location.number
    return None
