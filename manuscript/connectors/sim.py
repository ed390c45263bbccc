from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..errors import ConfigError
from ..simctl import BOOTED, SimulatorDevice
from .base import DesktopConnector


def _text(raw: Any) -> Optional[str]:
    # Unquoted YAML scalars such as 0.00 or 1234 are still text to the tree.
    return None if raw is None else str(raw)


@dataclass(eq=False)
class SimNode:
    role: str
    identifier: Optional[str] = None
    value: Optional[str] = None
    description: Optional[str] = None
    title: Optional[str] = None
    children: List["SimNode"] = field(default_factory=list)
    writable: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimNode":
        if not isinstance(data, dict) or not data.get("role"):
            raise ConfigError(f"Simulated node needs a 'role': {data!r}")
        return cls(
            role=str(data["role"]),
            identifier=_text(data.get("identifier")),
            value=_text(data.get("value")),
            description=_text(data.get("description")),
            title=_text(data.get("title")),
            children=[cls.from_dict(c) for c in data.get("children") or []],
            writable=bool(data.get("writable", True)),
        )


class SimConnector(DesktopConnector):
    """Accessibility tree held in memory; writes land on the ``SimNode`` objects."""

    def __init__(self, windows: Optional[List[SimNode]] = None, devices: Optional[List[SimulatorDevice]] = None, available: bool = True) -> None:
        self._windows = list(windows or [])
        self._devices = list(devices or [])
        self.available = available
        self.writes: List[tuple] = []

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimConnector":
        devices = [
            SimulatorDevice(
                name=str(d["name"]),
                udid=str(d.get("udid", "")),
                state=str(d.get("state", BOOTED)),
                os_version=str(d.get("os_version", "")),
            )
            for d in data.get("devices") or []
        ]
        windows = [SimNode.from_dict(w) for w in data.get("windows") or []]
        return cls(windows=windows, devices=devices)

    @classmethod
    def from_file(cls, path: str) -> "SimConnector":
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Could not read simulated tree: {e}", path=path) from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid simulated tree YAML: {e}", path=path) from e
        if not isinstance(data, dict):
            raise ConfigError("Simulated tree file must contain a mapping", path=path)
        return cls.from_dict(data)

    @classmethod
    def demo(cls) -> "SimConnector":
        device = SimulatorDevice(name="iPhone 16 Pro", udid="SIM-DEMO-0001", state=BOOTED, os_version="iOS 18.2")
        return cls(windows=[demo_transfer_window(f"{device.name} – {device.os_version}")], devices=[device])

    def is_available(self) -> bool:
        return self.available

    def windows(self) -> List[SimNode]:
        return list(self._windows)

    def booted_devices(self) -> List[SimulatorDevice]:
        return [d for d in self._devices if d.is_booted]

    def role_name(self, node: SimNode) -> Optional[str]:
        return node.role

    def identifier(self, node: SimNode) -> Optional[str]:
        return node.identifier

    def value(self, node: SimNode) -> Optional[str]:
        return node.value

    def description(self, node: SimNode) -> Optional[str]:
        return node.description

    def title(self, node: SimNode) -> Optional[str]:
        return node.title

    def children(self, node: SimNode) -> List[SimNode]:
        return list(node.children)

    def set_value(self, node: SimNode, text: str) -> bool:
        if not node.writable:
            return False
        node.value = text
        self.writes.append((node, text))
        return True


def demo_transfer_window(title: str) -> SimNode:
    """The money transfer screen of the demo app, one section per resolution strategy."""

    def section(header: str, *body: SimNode) -> SimNode:
        return SimNode("AXGroup", children=[SimNode("AXStaticText", value=header), *body])

    return SimNode("AXWindow", title=title, children=[
        SimNode("AXGroup", children=[
            SimNode("AXStaticText", value="SwiftUI Strategies"),
            section("1. Search by ID",
                    SimNode("AXTextField", identifier="transfer_recipient", description="Recipient Name")),
            section("2. Search by Label",
                    SimNode("AXGroup", children=[
                        SimNode("AXStaticText", value="Beneficiary IBAN"),
                        SimNode("AXTextField", description="IBAN"),
                    ])),
            section("3. Search by Placeholder",
                    SimNode("AXTextField", description="0.00")),
            section("4. Search by Value",
                    SimNode("AXTextField", value="Invoice Payment", description="Reference")),
            SimNode("AXButton", description="Send Transfer", children=[
                SimNode("AXStaticText", value="Send Transfer"),
            ]),
        ]),
    ])


def load_sim_connector(path: Optional[str] = None) -> SimConnector:
    if path is None:
        return SimConnector.demo()
    return SimConnector.from_file(str(Path(path)))
