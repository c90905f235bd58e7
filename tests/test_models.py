"""
Tests for value types.
"""

import dataclasses

import pytest

from battery_notifier.config import ConfigManager
from battery_notifier.models import Mode, Reading, Thresholds, Transition, Zone


class TestReading:

    def test_is_immutable(self):
        reading = Reading(source="BAT0", percent=50, mode=Mode.CHARGING)

        with pytest.raises(dataclasses.FrozenInstanceError):
            reading.percent = 20

    @pytest.mark.parametrize("percent", [-1, 100.5, 250])
    def test_rejects_percent_out_of_range(self, percent):
        with pytest.raises(ValueError):
            Reading(source="BAT0", percent=percent, mode=Mode.DISCHARGING)

    def test_equal_readings_compare_equal(self):
        assert Reading("BAT0", 85, Mode.CHARGING) == Reading("BAT0", 85, Mode.CHARGING)


class TestTransition:

    def test_rejects_unchanged_zone(self):
        with pytest.raises(ValueError):
            Transition(source="BAT0", from_zone=Zone.OTHER, to_zone=Zone.OTHER)

    def test_family_changed(self):
        assert Transition("BAT0", Zone.OTHER, Zone.DISCHARGING_CRITICAL).family_changed
        assert not Transition("BAT0", Zone.DISCHARGING_NORMAL, Zone.DISCHARGING_LOW).family_changed


class TestThresholds:

    def test_defaults(self):
        thresholds = Thresholds()

        assert (thresholds.high, thresholds.low, thresholds.critical) == (80, 30, 10)

    @pytest.mark.parametrize(
        "high, low, critical",
        [(80, 10, 30), (30, 80, 10), (80, 30, 30), (120, 30, 10), (80, 30, -1)],
    )
    def test_rejects_inconsistent_values(self, high, low, critical):
        with pytest.raises(ValueError):
            Thresholds(high=high, low=low, critical=critical)

    def test_from_config(self, write_config):
        config = ConfigManager(write_config({
            "high_threshold_percent": 90,
            "low_threshold_percent": 25,
            "critical_threshold_percent": 5,
        }))

        assert Thresholds.from_config(config) == Thresholds(high=90, low=25, critical=5)
