"""Tests for simctl enumeration — subprocess.run is mocked."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest

from manuscript.errors import AdapterUnavailableError, DeviceError
from manuscript.simctl import (
    SimulatorDevice,
    booted,
    list_devices,
    parse_device_list,
    parse_os_version,
)

SIMCTL_OUTPUT = {
    "devices": {
        "com.apple.CoreSimulator.SimRuntime.iOS-18-2": [
            {"name": "iPhone 16 Pro", "udid": "AAAA-1111", "state": "Booted", "isAvailable": True},
            {"name": "iPhone SE (3rd generation)", "udid": "BBBB-2222", "state": "Shutdown", "isAvailable": True},
        ],
        "com.apple.CoreSimulator.SimRuntime.watchOS-11-0": [
            {"name": "Apple Watch Series 10 (46mm)", "udid": "CCCC-3333", "state": "Booted", "isAvailable": True},
        ],
    }
}


def _completed(stdout: str = "", stderr: str = "", returncode: int = 0):
    proc = MagicMock()
    proc.stdout = stdout
    proc.stderr = stderr
    proc.returncode = returncode
    return proc


# ---------------------------------------------------------------------------
# parse_os_version
# ---------------------------------------------------------------------------


class TestParseOsVersion:
    @pytest.mark.parametrize("key,expected", [
        ("com.apple.CoreSimulator.SimRuntime.iOS-18-2", "iOS 18.2"),
        ("com.apple.CoreSimulator.SimRuntime.iOS-17-0-1", "iOS 17.0.1"),
        ("com.apple.CoreSimulator.SimRuntime.watchOS-11-0", "watchOS 11.0"),
        ("custom", "custom"),
    ])
    def test_versions(self, key, expected):
        assert parse_os_version(key) == expected


# ---------------------------------------------------------------------------
# parse_device_list / booted
# ---------------------------------------------------------------------------


class TestParseDeviceList:
    def test_all_devices(self):
        devices = parse_device_list(SIMCTL_OUTPUT)
        assert len(devices) == 3
        assert devices[0] == SimulatorDevice("iPhone 16 Pro", "AAAA-1111", "Booted", "iOS 18.2")

    def test_booted_filter(self):
        names = [d.name for d in booted(parse_device_list(SIMCTL_OUTPUT))]
        assert names == ["iPhone 16 Pro", "Apple Watch Series 10 (46mm)"]

    def test_empty(self):
        assert parse_device_list({}) == []

    def test_missing_field_raises(self):
        with pytest.raises(DeviceError, match="udid"):
            parse_device_list({"devices": {"iOS-18-2": [{"name": "x", "state": "Booted"}]}})


# ---------------------------------------------------------------------------
# list_devices
# ---------------------------------------------------------------------------


class TestListDevices:
    def test_runs_simctl_once(self):
        with patch("manuscript.simctl.subprocess.run", return_value=_completed(json.dumps(SIMCTL_OUTPUT))) as mock_run:
            devices = list_devices()
        assert len(devices) == 3
        mock_run.assert_called_once_with(
            ["xcrun", "simctl", "list", "devices", "-j"],
            capture_output=True, text=True, check=False,
        )

    def test_nonzero_exit_raises(self):
        with patch("manuscript.simctl.subprocess.run", return_value=_completed(stderr="boom", returncode=1)):
            with pytest.raises(DeviceError, match="boom"):
                list_devices()

    def test_invalid_json_raises(self):
        with patch("manuscript.simctl.subprocess.run", return_value=_completed("not json")):
            with pytest.raises(DeviceError, match="invalid JSON"):
                list_devices()

    def test_missing_xcrun(self):
        with patch("manuscript.simctl.subprocess.run", side_effect=FileNotFoundError("xcrun")):
            with pytest.raises(AdapterUnavailableError):
                list_devices()
