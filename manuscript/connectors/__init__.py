from __future__ import annotations

import platform
from typing import Optional

from ..errors import AdapterUnavailableError
from .base import DesktopConnector


def get_connector(os_override: Optional[str] = None, sim_tree: Optional[str] = None) -> DesktopConnector:
    name = (os_override or platform.system()).lower()
    if name == "sim":
        from .sim import load_sim_connector
        return load_sim_connector(sim_tree)
    if name == "darwin":
        try:
            from .macos import MacOSConnector
        except ImportError as e:
            raise AdapterUnavailableError(f"macOS accessibility bindings are not available: {e}") from e
        return MacOSConnector()
    raise AdapterUnavailableError(f"Unsupported platform: {name} (use --os sim for the simulated tree)")
