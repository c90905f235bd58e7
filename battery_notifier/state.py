"""
Per-source zone tracking.
"""

import logging
from typing import Dict, List, Optional

from battery_notifier.classifier import classify
from battery_notifier.models import DEFAULT_THRESHOLDS, Reading, Thresholds, Transition, Zone

logger = logging.getLogger("BatteryNotifier.State")


class StateStore:
    """
    Last observed zone for every power source seen during this run.

    Not thread-safe. The dispatcher is the only caller and processes one
    reading at a time.
    """

    def __init__(self, thresholds: Thresholds = DEFAULT_THRESHOLDS):
        self.thresholds = thresholds
        self._zones: Dict[str, Zone] = {}

    def update(self, source: str, reading: Reading) -> Optional[Transition]:
        """
        Record a reading and report whether its zone changed.

        Args:
            source: Power source identifier
            reading: Latest reading for the source

        Returns:
            Transition if the classified zone differs from the stored one,
            None otherwise
        """
        current = self._zones.get(source, Zone.OTHER)
        new_zone = classify(reading, self.thresholds)

        if source not in self._zones:
            logger.debug(f"First reading for {source}")
            self._zones[source] = current

        if new_zone == current:
            return None

        self._zones[source] = new_zone
        return Transition(source=source, from_zone=current, to_zone=new_zone)

    def zone_for(self, source: str) -> Zone:
        """Get the stored zone for a source (OTHER if never seen)."""
        return self._zones.get(source, Zone.OTHER)

    def sources(self) -> List[str]:
        """Get all sources seen so far, in first-seen order."""
        return list(self._zones)

    def __len__(self) -> int:
        return len(self._zones)
