from __future__ import annotations

import logging
from typing import Any, List, Optional

from ..ax import AXFinder
from ..simctl import SimulatorDevice, booted, list_devices
from .base import DesktopConnector

logger = logging.getLogger("manuscript.connectors.macos")


class MacOSConnector(DesktopConnector):
    """Live tree of the running Simulator.app, read through the AX API."""

    def __init__(self) -> None:
        self.ax = AXFinder()

    def unavailable_reason(self) -> Optional[str]:
        if not self.ax.is_accessibility_enabled():
            return "Accessibility access is not granted to this process (System Settings > Privacy & Security > Accessibility)"
        if self.ax.get_app_ax() is None:
            return "Simulator.app is not running"
        return None

    def is_available(self) -> bool:
        reason = self.unavailable_reason()
        if reason:
            logger.debug("accessibility tree unavailable: %s", reason)
        return reason is None

    def windows(self) -> List[Any]:
        app = self.ax.get_app_ax()
        if app is None:
            return []
        return self.ax.get_windows(app)

    def booted_devices(self) -> List[SimulatorDevice]:
        return booted(list_devices())

    def role_name(self, node: Any) -> Optional[str]:
        return self.ax.get_role(node)

    def identifier(self, node: Any) -> Optional[str]:
        return self.ax.get_identifier(node)

    def value(self, node: Any) -> Optional[str]:
        return self.ax.get_value(node)

    def description(self, node: Any) -> Optional[str]:
        return self.ax.get_description(node)

    def title(self, node: Any) -> Optional[str]:
        return self.ax.get_title(node)

    def children(self, node: Any) -> List[Any]:
        return self.ax.get_children(node)

    def set_value(self, node: Any, text: str) -> bool:
        return self.ax.set_value(node, text)
