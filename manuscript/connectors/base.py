from __future__ import annotations

from typing import Any, Iterator, List, Optional, Tuple

from ..interaction.roles import RoleKind, is_interactable, normalize_role
from ..simctl import SimulatorDevice

AccessibilityNode = Any


class DesktopConnector:
    """Read/write capability over an accessibility tree owned by another process.

    Implementations never raise from the per-node accessors: an unreadable
    attribute comes back as ``None`` (or an empty list) and a rejected write
    as ``False``.
    """

    def is_available(self) -> bool:  # pragma: no cover - interface
        raise NotImplementedError

    def unavailable_reason(self) -> Optional[str]:
        return None if self.is_available() else "accessibility tree is not reachable"

    def windows(self) -> List[AccessibilityNode]:  # pragma: no cover - interface
        raise NotImplementedError

    def booted_devices(self) -> List[SimulatorDevice]:  # pragma: no cover - interface
        raise NotImplementedError

    def role_name(self, node: AccessibilityNode) -> Optional[str]:  # pragma: no cover - interface
        raise NotImplementedError

    def identifier(self, node: AccessibilityNode) -> Optional[str]:  # pragma: no cover - interface
        raise NotImplementedError

    def value(self, node: AccessibilityNode) -> Optional[str]:  # pragma: no cover - interface
        raise NotImplementedError

    def description(self, node: AccessibilityNode) -> Optional[str]:  # pragma: no cover - interface
        raise NotImplementedError

    def title(self, node: AccessibilityNode) -> Optional[str]:  # pragma: no cover - interface
        raise NotImplementedError

    def children(self, node: AccessibilityNode) -> List[AccessibilityNode]:  # pragma: no cover - interface
        raise NotImplementedError

    def set_value(self, node: AccessibilityNode, text: str) -> bool:  # pragma: no cover - interface
        raise NotImplementedError

    def role(self, node: AccessibilityNode) -> RoleKind:
        return normalize_role(self.role_name(node))

    def is_interactable(self, node: AccessibilityNode) -> bool:
        return is_interactable(self.role(node))

    def value_or_description(self, node: AccessibilityNode) -> str:
        # Many controls only expose a description, so it stands in for an empty value.
        value = self.value(node)
        if value:
            return value
        desc = self.description(node)
        if desc:
            return desc
        return ""

    def walk(self, root: AccessibilityNode) -> Iterator[Tuple[AccessibilityNode, int]]:
        """Yield ``(node, depth)`` in pre-order, children in the order the UI reports them."""
        stack: List[Tuple[AccessibilityNode, int]] = [(root, 0)]
        while stack:
            current, depth = stack.pop()
            yield current, depth
            children = self.children(current)
            stack.extend((child, depth + 1) for child in reversed(children))
