"""
Pytest configuration and shared fixtures.
"""

import json

import pytest

from battery_notifier.notifier import BatteryNotifier
from tests.helpers import RecordingSink


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def notifier(sink):
    return BatteryNotifier(sink)


@pytest.fixture
def write_config(tmp_path):
    """Write a JSON config file and return its path."""

    def _write(values):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(values))
        return str(path)

    return _write
