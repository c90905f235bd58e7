"""
Tests for per-source zone tracking.
"""

from battery_notifier.models import Thresholds, Transition, Zone
from battery_notifier.state import StateStore
from tests.helpers import charging, discharging, other


def test_unseen_source_reads_as_other():
    store = StateStore()

    assert store.zone_for("BAT0") == Zone.OTHER
    assert len(store) == 0


def test_first_reading_transitions_from_other():
    store = StateStore()

    transition = store.update("BAT0", discharging(50))

    assert transition == Transition("BAT0", Zone.OTHER, Zone.DISCHARGING_NORMAL)
    assert store.zone_for("BAT0") == Zone.DISCHARGING_NORMAL


def test_first_other_reading_creates_entry_without_transition():
    store = StateStore()

    assert store.update("BAT0", other()) is None
    assert store.sources() == ["BAT0"]


def test_repeated_readings_transition_once():
    store = StateStore()

    results = [store.update("BAT0", charging(85)) for _ in range(5)]

    assert results[0] == Transition("BAT0", Zone.OTHER, Zone.CHARGING_HIGH)
    assert results[1:] == [None] * 4


def test_readings_within_same_zone_do_not_transition():
    store = StateStore()
    store.update("BAT0", discharging(29))

    assert store.update("BAT0", discharging(20)) is None
    assert store.update("BAT0", discharging(11)) is None
    assert store.zone_for("BAT0") == Zone.DISCHARGING_LOW


def test_store_always_holds_zone_of_latest_reading():
    store = StateStore()
    readings = [discharging(50), discharging(25), charging(50), other(), discharging(5)]

    for reading in readings:
        store.update("BAT0", reading)

    assert store.zone_for("BAT0") == Zone.DISCHARGING_CRITICAL


def test_consecutive_transitions_never_repeat():
    store = StateStore()
    readings = [discharging(p) for p in (50, 40, 30, 25, 10, 10, 9, 31)]

    transitions = [t for t in (store.update("BAT0", r) for r in readings) if t]

    for previous, current in zip(transitions, transitions[1:]):
        assert current.from_zone == previous.to_zone
        assert current.from_zone != current.to_zone


def test_sources_are_independent():
    store = StateStore()

    store.update("BAT0", discharging(50))
    store.update("BAT1", charging(50))
    transition = store.update("BAT0", discharging(5))

    assert transition.source == "BAT0"
    assert store.zone_for("BAT1") == Zone.CHARGING_NORMAL
    assert store.sources() == ["BAT0", "BAT1"]


def test_uses_configured_thresholds():
    store = StateStore(Thresholds(high=95, low=40, critical=20))

    assert store.update("BAT0", discharging(35)).to_zone == Zone.DISCHARGING_LOW
    assert store.update("BAT0", charging(90)).to_zone == Zone.CHARGING_NORMAL
