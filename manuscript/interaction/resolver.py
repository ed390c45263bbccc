"""Map a target string to one interactable node of an accessibility tree.

Four strategies are tried in a fixed order and the first hit wins:

1. ID: a node whose identifier equals the target. When the identifier sits
   on a container, the first text field inside that container is used.
2. Label Anchor: a static text equal to the target, then the first text
   field after it in pre-order.
3. Placeholder / 4. Value Match: a text field whose value (or description)
   equals the target. Both come from one search; which one is reported
   depends on whether the field already holds the value the step wants to
   write (see :func:`classify_text_match`).

All comparisons are exact string equality.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from ..connectors.base import DesktopConnector
from .roles import RoleKind

logger = logging.getLogger("manuscript.resolver")


class Strategy(str, Enum):
    ID = "ID"
    LABEL_ANCHOR = "Label Anchor"
    PLACEHOLDER = "Placeholder"
    VALUE_MATCH = "Value Match"


@dataclass(frozen=True)
class Resolution:
    node: Any
    strategy: Strategy
    matched_text: Optional[str] = None

    @property
    def already_filled(self) -> bool:
        return self.strategy is Strategy.VALUE_MATCH


def classify_text_match(matched_text: str, intended_value: Optional[str]) -> Strategy:
    if intended_value is not None and matched_text == intended_value:
        return Strategy.VALUE_MATCH
    return Strategy.PLACEHOLDER


class ElementResolver:
    def __init__(self, connector: DesktopConnector) -> None:
        self.conn = connector

    def resolve(self, root: Any, target: str, intended_value: Optional[str] = None) -> Optional[Resolution]:
        node = self.find_by_identifier(root, target)
        if node is not None:
            return self._hit(target, Resolution(node, Strategy.ID))

        node = self.find_by_label(root, target)
        if node is not None:
            return self._hit(target, Resolution(node, Strategy.LABEL_ANCHOR))

        node = self.find_by_text(root, target)
        if node is not None:
            text = self.conn.value_or_description(node)
            return self._hit(target, Resolution(node, classify_text_match(text, intended_value), matched_text=text))

        logger.debug("no strategy matched %r", target)
        return None

    def _hit(self, target: str, resolution: Resolution) -> Resolution:
        logger.debug("resolved %r via %s", target, resolution.strategy.value)
        return resolution

    def find_by_identifier(self, root: Any, identifier: str) -> Optional[Any]:
        stack: List[Any] = [root]
        while stack:
            current = stack.pop()
            if self.conn.identifier(current) == identifier:
                if self.conn.is_interactable(current):
                    return current
                field = self.first_text_field(current)
                if field is not None:
                    return field
                # A matching container with no field inside: keep looking elsewhere.
                continue
            stack.extend(reversed(self.conn.children(current)))
        return None

    def find_by_label(self, root: Any, label: str) -> Optional[Any]:
        found_label = False
        for current, _ in self.conn.walk(root):
            if not found_label:
                if self.conn.role(current) is RoleKind.STATIC_TEXT and self.conn.value_or_description(current) == label:
                    found_label = True
            elif self.conn.is_interactable(current):
                return current
        return None

    def find_by_text(self, root: Any, text: str) -> Optional[Any]:
        for current, _ in self.conn.walk(root):
            if self.conn.is_interactable(current) and self.conn.value_or_description(current) == text:
                return current
        return None

    def first_text_field(self, root: Any) -> Optional[Any]:
        for current, _ in self.conn.walk(root):
            if self.conn.is_interactable(current):
                return current
        return None
