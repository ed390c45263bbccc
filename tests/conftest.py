from __future__ import annotations

import pytest

from manuscript.connectors.sim import SimConnector


@pytest.fixture
def conn() -> SimConnector:
    return SimConnector()


@pytest.fixture
def demo() -> SimConnector:
    return SimConnector.demo()
