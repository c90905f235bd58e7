"""
Reading streams feeding the dispatcher.

Both samplers implement the same blocking next_reading() operation so the
dispatcher does not care whether readings come from a timer or from OS
events.
"""

import logging
import threading
from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Optional

from battery_notifier.models import Reading
from battery_notifier.sources import BatteryProvider, UdevSubscription, parse_event

logger = logging.getLogger("BatteryNotifier.Sampler")


class Sampler(ABC):
    """A blocking stream of readings."""

    def __init__(self, stop_event: Optional[threading.Event] = None):
        self.stop_event = stop_event or threading.Event()

    @abstractmethod
    def next_reading(self) -> Optional[Reading]:
        """
        Block until the next reading is available.

        Returns:
            Next reading, or None once the sampler has been stopped

        Raises:
            ReadingError: If one source could not be read; the next call
                continues with the following source or event
        """
        ...


class PollingSampler(Sampler):
    """Reads every known source once per interval, in a stable order."""

    def __init__(
        self,
        provider: BatteryProvider,
        interval: float = 30,
        stop_event: Optional[threading.Event] = None,
    ):
        """
        Initialize polling sampler.

        Args:
            provider: Battery provider to poll
            interval: Seconds between polling cycles
            stop_event: Set to stop sampling (wakes the wait immediately)
        """
        super().__init__(stop_event)
        self.provider = provider
        self.interval = interval
        self._pending: Deque[str] = deque()
        self._started = False

    def _start_cycle(self):
        sources = self.provider.list_sources()
        if not sources:
            logger.debug("No power sources found this cycle")
        self._pending.extend(sources)

    def next_reading(self) -> Optional[Reading]:
        while not self._pending:
            if self._started:
                # Wait for next cycle (wakes immediately if stop_event is set)
                if self.stop_event.wait(timeout=self.interval):
                    return None
            elif self.stop_event.is_set():
                return None

            self._started = True
            self._start_cycle()

        if self.stop_event.is_set():
            return None

        # Consumed before reading so a failure moves on to the next source
        source = self._pending.popleft()
        return self.provider.refresh(source)


class EventSampler(Sampler):
    """Turns batches of udev events into readings, in arrival order."""

    def __init__(
        self,
        subscription: UdevSubscription,
        stop_event: Optional[threading.Event] = None,
        wait_timeout: float = 1.0,
    ):
        """
        Initialize event sampler.

        Args:
            subscription: Established udev subscription
            stop_event: Set to stop sampling
            wait_timeout: Seconds to block per wait before rechecking stop_event
        """
        super().__init__(stop_event)
        self.subscription = subscription
        self.wait_timeout = wait_timeout
        self._pending: Deque = deque()

    def next_reading(self) -> Optional[Reading]:
        while not self.stop_event.is_set():
            if not self._pending:
                self._pending.extend(self.subscription.wait_for_batch(self.wait_timeout))
                continue

            reading = parse_event(self._pending.popleft())
            if reading is not None:
                return reading

        return None
