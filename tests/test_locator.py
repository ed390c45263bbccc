"""Tests for picking the simulator window to drive."""

from __future__ import annotations

import pytest

from manuscript.connectors.sim import SimConnector, SimNode
from manuscript.errors import AdapterUnavailableError, DeviceError
from manuscript.interaction.locator import attach, locate_active_window

from .trees import device, window


# ---------------------------------------------------------------------------
# locate_active_window
# ---------------------------------------------------------------------------


class TestLocateActiveWindow:
    def test_matches_title_substring(self, conn):
        w = window(title="iPhone 16 Pro – iOS 18.2")
        d = device("iPhone 16 Pro")
        assert locate_active_window(conn, [w], [d]) == (w, d)

    def test_first_window_in_host_order_wins(self, conn):
        first = window(title="iPad Air – iPadOS 18")
        second = window(title="iPhone 16 Pro – iOS 18.2")
        ipad = device("iPad Air")
        iphone = device("iPhone 16 Pro")
        assert locate_active_window(conn, [first, second], [iphone, ipad]) == (first, ipad)

    def test_substring_collision_takes_first_candidate(self, conn):
        w = window(title="iPhone 16 Pro Max")
        short = device("iPhone 16")
        longer = device("iPhone 16 Pro Max")
        assert locate_active_window(conn, [w], [short, longer]) == (w, short)

    def test_untitled_windows_are_skipped(self, conn):
        untitled = SimNode("AXWindow")
        titled = window(title="iPhone 15")
        assert locate_active_window(conn, [untitled, titled], [device("iPhone 15")]) == (titled, device("iPhone 15"))

    def test_no_match(self, conn):
        assert locate_active_window(conn, [window(title="Simulator")], [device("iPhone 15")]) is None

    def test_no_candidates(self, conn):
        assert locate_active_window(conn, [window()], []) is None


# ---------------------------------------------------------------------------
# attach
# ---------------------------------------------------------------------------


class TestAttach:
    def test_demo(self, demo):
        win, dev = attach(demo)
        assert dev.name == "iPhone 16 Pro"
        assert dev.name in win.title

    def test_unavailable_adapter(self):
        conn = SimConnector(windows=[window()], devices=[device()], available=False)
        with pytest.raises(AdapterUnavailableError):
            attach(conn)

    def test_no_booted_device(self):
        conn = SimConnector(windows=[window()], devices=[device(state="Shutdown")])
        with pytest.raises(DeviceError, match="No booted simulators"):
            attach(conn)

    def test_no_matching_window(self):
        conn = SimConnector(windows=[window(title="Apple Watch")], devices=[device("iPhone 16 Pro")])
        with pytest.raises(DeviceError, match="active window"):
            attach(conn)
