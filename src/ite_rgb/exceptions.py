"""Custom exceptions for ITE keyboard backlight control."""


class ITERGBError(Exception):
    """Base exception for ITE keyboard backlight errors."""


class DeviceNotFoundError(ITERGBError):
    """Raised when no matching keyboard is found on the bus."""

    def __init__(self, message: str = "device not found") -> None:
        super().__init__(message)


class DeviceCommunicationError(ITERGBError):
    """Raised when communication with the device fails."""


class OpenFailedError(DeviceCommunicationError):
    """Raised when the USB device cannot be opened."""


class ClaimFailedError(DeviceCommunicationError):
    """Raised when the keyboard interface cannot be claimed."""


class TransferError(DeviceCommunicationError):
    """Raised when a control or payload transfer fails."""


class SetupFailedError(TransferError):
    """Raised when the initialization frame is rejected.

    Nothing else is sent to the device after this error.
    """


class EndpointNotFoundError(DeviceCommunicationError):
    """Raised when the descriptor tree has no OUT endpoint."""

    def __init__(self, message: str = "no valid out endpoint") -> None:
        super().__init__(message)


class UnknownModeError(ITERGBError):
    """Raised when a lighting mode name is not recognized."""

    def __init__(self, mode: str) -> None:
        self.mode = mode
        super().__init__(f"Unknown mode '{mode}'")


class UnknownColorError(ITERGBError):
    """Raised when a color name cannot be resolved to RGB."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown color '{name}'")


class RangeError(ITERGBError, ValueError):
    """Raised when a row or column range expression is malformed."""
