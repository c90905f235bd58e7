"""
Threshold policy mapping a reading to its zone.
"""

from battery_notifier.models import DEFAULT_THRESHOLDS, Mode, Reading, Thresholds, Zone


def classify(reading: Reading, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> Zone:
    """
    Classify a reading into a zone.

    Lower bounds are inclusive when discharging and the upper bound is
    inclusive when charging, so a reading exactly at a threshold already
    belongs to the more severe zone.

    Args:
        reading: Reading to classify
        thresholds: Threshold configuration

    Returns:
        Zone for the reading
    """
    if reading.mode is Mode.OTHER:
        return Zone.OTHER

    if reading.mode is Mode.DISCHARGING:
        if reading.percent <= thresholds.critical:
            return Zone.DISCHARGING_CRITICAL
        if reading.percent <= thresholds.low:
            return Zone.DISCHARGING_LOW
        return Zone.DISCHARGING_NORMAL

    if reading.mode is Mode.CHARGING:
        if reading.percent >= thresholds.high:
            return Zone.CHARGING_HIGH
        return Zone.CHARGING_NORMAL

    raise ValueError(f"Unknown mode: {reading.mode!r}")
