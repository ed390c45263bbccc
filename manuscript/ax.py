from __future__ import annotations

from typing import Any, List, Optional

from AppKit import NSWorkspace
from ApplicationServices import (
    AXIsProcessTrusted,
    AXUIElementCopyAttributeValue,
    AXUIElementSetAttributeValue,
    AXUIElementCreateApplication,
    kAXChildrenAttribute,
    kAXDescriptionAttribute,
    kAXRoleAttribute,
    kAXTitleAttribute,
    kAXValueAttribute,
    kAXWindowsAttribute,
)

AXElement = Any

SIMULATOR_BUNDLE_ID = "com.apple.iphonesimulator"


class AXFinder:
    def __init__(self, bundle_id: str = SIMULATOR_BUNDLE_ID) -> None:
        self.bundle_id = bundle_id

    def is_accessibility_enabled(self) -> bool:
        return bool(AXIsProcessTrusted())

    def get_app_ax(self) -> Optional[AXElement]:
        ws = NSWorkspace.sharedWorkspace()
        for app in ws.runningApplications():
            if app.bundleIdentifier() == self.bundle_id:
                return AXUIElementCreateApplication(app.processIdentifier())
        return None

    def copy_attribute(self, element: AXElement, attribute: str) -> Any:
        try:
            err, value = AXUIElementCopyAttributeValue(element, attribute, None)
            if err:
                return None
            return value
        except Exception:
            return None

    def set_attribute(self, element: AXElement, attribute: str, value: Any) -> bool:
        try:
            err = AXUIElementSetAttributeValue(element, attribute, value)
            return not bool(err)
        except Exception:
            return False

    def _copy_string(self, element: AXElement, attribute: str) -> Optional[str]:
        value = self.copy_attribute(element, attribute)
        # Non-string values (numbers, ranges) are not text for our purposes.
        return str(value) if isinstance(value, str) else None

    def get_windows(self, app: AXElement) -> List[AXElement]:
        value = self.copy_attribute(app, kAXWindowsAttribute)
        return list(value or [])

    def get_children(self, element: AXElement) -> List[AXElement]:
        value = self.copy_attribute(element, kAXChildrenAttribute)
        return list(value or [])

    def get_title(self, element: AXElement) -> Optional[str]:
        return self._copy_string(element, kAXTitleAttribute)

    def get_role(self, element: AXElement) -> Optional[str]:
        return self._copy_string(element, kAXRoleAttribute)

    def get_identifier(self, element: AXElement) -> Optional[str]:
        return self._copy_string(element, "AXIdentifier")

    def get_value(self, element: AXElement) -> Optional[str]:
        return self._copy_string(element, kAXValueAttribute)

    def get_description(self, element: AXElement) -> Optional[str]:
        return self._copy_string(element, kAXDescriptionAttribute)

    def set_value(self, element: AXElement, value: str) -> bool:
        return self.set_attribute(element, kAXValueAttribute, value)
