from __future__ import annotations

from enum import Enum
from typing import Optional


class RoleKind(str, Enum):
    TEXT_FIELD = "TextField"
    TEXT_AREA = "TextArea"
    STATIC_TEXT = "StaticText"
    WINDOW = "Window"
    OTHER = "Other"


INTERACTABLE_ROLES = frozenset({RoleKind.TEXT_FIELD, RoleKind.TEXT_AREA})


def normalize_role(os_role: Optional[str] = None) -> RoleKind:
    r = (os_role or "").lower()
    mapping = {
        "axtextfield": RoleKind.TEXT_FIELD,
        "axtextarea": RoleKind.TEXT_AREA,
        "axstatictext": RoleKind.STATIC_TEXT,
        "axwindow": RoleKind.WINDOW,
        "textfield": RoleKind.TEXT_FIELD,
        "textarea": RoleKind.TEXT_AREA,
        "statictext": RoleKind.STATIC_TEXT,
        "window": RoleKind.WINDOW,
    }
    return mapping.get(r, RoleKind.OTHER)


def is_interactable(role: RoleKind) -> bool:
    return role in INTERACTABLE_ROLES
