"""
Event loop connecting the sampler, the state store and the notifier.
"""

import logging
import threading
from typing import Optional

from battery_notifier.models import Reading, Transition
from battery_notifier.notifier import BatteryNotifier
from battery_notifier.sampler import Sampler
from battery_notifier.sources import ReadingError
from battery_notifier.state import StateStore


class Dispatcher:
    """
    Pulls readings, detects zone changes and forwards them to the notifier.

    Each reading is classified, stored and notified before the next one is
    taken, so the store is only ever touched from this loop.
    """

    def __init__(
        self,
        store: StateStore,
        notifier: BatteryNotifier,
        stop_event: Optional[threading.Event] = None,
    ):
        """
        Initialize dispatcher.

        Args:
            store: StateStore instance
            notifier: BatteryNotifier instance
            stop_event: Set to end the run loop
        """
        self.store = store
        self.notifier = notifier
        self.stop_event = stop_event or threading.Event()
        self.logger = logging.getLogger("BatteryNotifier.Dispatcher")

    def handle(self, reading: Reading) -> Optional[Transition]:
        """
        Process one reading.

        Args:
            reading: Reading to process

        Returns:
            Transition if the reading changed its source's zone, None otherwise
        """
        transition = self.store.update(reading.source, reading)
        if transition is None:
            self.logger.debug(
                f"{reading.source}: {reading.mode.value} {reading.percent}%, "
                f"zone unchanged ({self.store.zone_for(reading.source).value})"
            )
            return None

        self.logger.info(
            f"{transition.source}: {transition.from_zone.value} -> {transition.to_zone.value} "
            f"({reading.percent}%)"
        )

        try:
            self.notifier.notify(transition, reading)
        except Exception as e:
            self.logger.error(f"Error delivering notification: {e}", exc_info=True)

        return transition

    def run(self, sampler: Sampler):
        """
        Run until stopped.

        Args:
            sampler: Source of readings

        Raises:
            SourceUnavailableError: If the reading source fails fatally
        """
        self.logger.info("Dispatcher loop started")

        while not self.stop_event.is_set():
            try:
                reading = sampler.next_reading()
            except ReadingError as e:
                self.logger.warning(f"Skipping reading: {e}")
                continue

            if reading is None:
                break

            self.handle(reading)

        self.logger.info("Dispatcher loop exited")

    def stop(self):
        """Stop the run loop gracefully."""
        self.logger.info("Stopping dispatcher...")
        self.stop_event.set()
