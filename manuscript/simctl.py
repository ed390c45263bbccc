"""Simulator enumeration through ``xcrun simctl``."""

from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

from .errors import AdapterUnavailableError, DeviceError

logger = logging.getLogger("manuscript.simctl")

BOOTED = "Booted"


@dataclass(frozen=True)
class SimulatorDevice:
    name: str
    udid: str
    state: str
    os_version: str

    @property
    def is_booted(self) -> bool:
        return self.state == BOOTED


def parse_os_version(runtime_key: str) -> str:
    """Turn a runtime identifier into a display version.

    e.g. 'com.apple.CoreSimulator.SimRuntime.iOS-18-2' -> 'iOS 18.2'
    """
    last = runtime_key.split(".")[-1]
    parts = last.split("-")
    if len(parts) >= 2:
        return f"{parts[0]} {'.'.join(parts[1:])}"
    return last


def parse_device_list(data: Dict[str, Any]) -> List[SimulatorDevice]:
    devices: List[SimulatorDevice] = []
    for runtime_key, entries in (data.get("devices") or {}).items():
        os_version = parse_os_version(runtime_key)
        for entry in entries or []:
            try:
                devices.append(SimulatorDevice(
                    name=str(entry["name"]),
                    udid=str(entry["udid"]),
                    state=str(entry["state"]),
                    os_version=os_version,
                ))
            except KeyError as e:
                raise DeviceError(f"simctl device entry is missing {e}") from e
    return devices


def list_devices() -> List[SimulatorDevice]:
    """Run ``xcrun simctl list devices -j`` once and return every simulator it knows."""
    try:
        proc = subprocess.run(
            ["xcrun", "simctl", "list", "devices", "-j"],
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as e:
        raise AdapterUnavailableError("xcrun not found; Xcode command line tools are required") from e
    if proc.returncode != 0:
        raise DeviceError(f"simctl list failed: {proc.stderr.strip()}")
    try:
        data = json.loads(proc.stdout)
    except json.JSONDecodeError as e:
        raise DeviceError(f"simctl returned invalid JSON: {e}") from e
    devices = parse_device_list(data)
    logger.debug("simctl reported %d simulator(s)", len(devices))
    return devices


def booted(devices: Iterable[SimulatorDevice]) -> List[SimulatorDevice]:
    return [d for d in devices if d.is_booted]
