from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence, Tuple

from ..connectors.base import DesktopConnector
from ..errors import AdapterUnavailableError, DeviceError
from ..simctl import SimulatorDevice

logger = logging.getLogger("manuscript.locator")


def locate_active_window(conn: DesktopConnector, windows: Iterable[Any], candidates: Sequence[SimulatorDevice]) -> Optional[Tuple[Any, SimulatorDevice]]:
    """First window, in host order, whose title contains a candidate's name."""
    for window in windows:
        title = conn.title(window)
        if not title:
            continue
        for device in candidates:
            if device.name in title:
                return window, device
    return None


def attach(conn: DesktopConnector) -> Tuple[Any, SimulatorDevice]:
    """Find the window to drive, or raise before any step runs."""
    reason = conn.unavailable_reason()
    if reason:
        raise AdapterUnavailableError(reason)

    devices = conn.booted_devices()
    logger.debug("%d booted simulator(s): %s", len(devices), ", ".join(d.name for d in devices))
    if not devices:
        raise DeviceError("No booted simulators found.")

    windows = conn.windows()
    found = locate_active_window(conn, windows, devices)
    if found is None:
        raise DeviceError("Could not find any active window matching a booted simulator.")
    return found
