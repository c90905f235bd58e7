"""
Test doubles and reading factories shared across test modules.
"""

import threading
from typing import List, Tuple

from battery_notifier.models import Mode, Reading
from battery_notifier.notifier import NotificationSink, Urgency


class RecordingSink(NotificationSink):
    """Sink that records every alert it is asked to send."""

    def __init__(self, succeed: bool = True):
        self.sent: List[Tuple[Urgency, str, str]] = []
        self.succeed = succeed

    def send(self, urgency, title, body):
        self.sent.append((urgency, title, body))
        return self.succeed


class ListSampler:
    """Sampler replaying a fixed list; exceptions in the list are raised."""

    def __init__(self, items):
        self.items = list(items)
        self.stop_event = threading.Event()

    def next_reading(self):
        if not self.items:
            return None
        item = self.items.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def discharging(percent, source="BAT0"):
    return Reading(source=source, percent=percent, mode=Mode.DISCHARGING)


def charging(percent, source="BAT0"):
    return Reading(source=source, percent=percent, mode=Mode.CHARGING)


def other(percent=50, source="BAT0"):
    return Reading(source=source, percent=percent, mode=Mode.OTHER)
