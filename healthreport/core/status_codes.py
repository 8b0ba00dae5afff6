"""
Device status classification.

Lookup tables translating the numeric codes reported for sound devices
into display labels and messages. Device status codes follow the CIM
Availability values; configuration-error codes follow the Windows device
manager problem codes.
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class StatusCode:
    """A classified status code."""

    code: Optional[int]
    label: str
    message: str
    known: bool = True


DEVICE_STATUS: Dict[int, StatusCode] = {
    1: StatusCode(1, "Other", "The device reports a vendor-specific state"),
    2: StatusCode(2, "Status Unknown", "The device state could not be determined"),
    3: StatusCode(3, "OK", "The device is running at full power"),
    4: StatusCode(4, "Warning", "The device is running but reports a warning"),
    5: StatusCode(5, "In Test", "The device is being tested"),
    6: StatusCode(6, "Not Applicable", "Availability does not apply to this device"),
    7: StatusCode(7, "Power Off", "The device is powered off"),
    8: StatusCode(8, "Offline", "The device is offline"),
    9: StatusCode(9, "Off Duty", "The device is off duty"),
    10: StatusCode(10, "Degraded", "The device is running in a degraded state"),
    11: StatusCode(11, "Not Installed", "The device is not installed"),
    12: StatusCode(12, "Install Error", "The device failed to install"),
    13: StatusCode(13, "Power Save", "The device is in a power save mode"),
}

CONFIG_ERRORS: Dict[int, StatusCode] = {
    0: StatusCode(0, "Working", "This device is working properly."),
    1: StatusCode(1, "Not Configured", "This device is not configured correctly."),
    2: StatusCode(2, "Driver Load Failed", "Windows cannot load the driver for this device."),
    3: StatusCode(
        3,
        "Driver Corrupted",
        "The driver for this device might be corrupted, or the system may be low on memory.",
    ),
    4: StatusCode(
        4,
        "Not Working",
        "This device is not working properly. One of its drivers or the registry might be corrupted.",
    ),
    5: StatusCode(
        5,
        "Resource Unmanageable",
        "The driver for this device needs a resource that Windows cannot manage.",
    ),
    6: StatusCode(
        6,
        "Boot Conflict",
        "The boot configuration for this device conflicts with other devices.",
    ),
    7: StatusCode(7, "Cannot Filter", "Cannot filter."),
    8: StatusCode(8, "Loader Missing", "The driver loader for the device is missing."),
    9: StatusCode(
        9,
        "Firmware Resources",
        "This device is not working properly because the controlling firmware "
        "is reporting the resources for the device incorrectly.",
    ),
    10: StatusCode(10, "Cannot Start", "This device cannot start."),
}


def _coerce(code) -> Optional[int]:
    if code is None or isinstance(code, bool):
        return None
    try:
        return int(code)
    except (TypeError, ValueError):
        return None


def classify_device_status(code) -> StatusCode:
    """Map a device status code to its label, defaulting to Unknown."""
    value = _coerce(code)
    entry = DEVICE_STATUS.get(value)
    if entry is None:
        return StatusCode(value, "Unknown", "The device reported an unrecognized status", known=False)
    return entry


def classify_config_error(code) -> StatusCode:
    """Map a configuration-error code to a supplementary message, defaulting to none."""
    value = _coerce(code)
    entry = CONFIG_ERRORS.get(value)
    if entry is None:
        return StatusCode(value, "Unknown", "", known=False)
    return entry


def describe_device(status_code, config_error_code) -> StatusCode:
    """
    Combine both tables into the label and message shown for a device.

    The label comes from the device status; the configuration-error message,
    when there is one, is appended to the status message.
    """
    status = classify_device_status(status_code)
    config_error = classify_config_error(config_error_code)
    message = status.message
    if config_error.message:
        message = f"{message}. {config_error.message}"
    return StatusCode(status.code, status.label, message, known=status.known)
