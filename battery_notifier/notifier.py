"""
Cross-platform notification system for battery alerts.
"""

import logging
import platform
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from battery_notifier.models import Family, Reading, Transition, Zone

logger = logging.getLogger("BatteryNotifier.Notifier")

APP_NAME = "Battery Notifier"
TITLE = "Battery Notifications"
URGENT_TITLE = "Battery Critical"


class Urgency(Enum):
    """Severity of an alert."""
    NORMAL = "normal"
    ELEVATED = "elevated"
    URGENT = "urgent"


# Seconds an alert stays on screen
URGENCY_TIMEOUTS = {
    Urgency.NORMAL: 5,
    Urgency.ELEVATED: 10,
    Urgency.URGENT: 30,
}

MODE_MESSAGES = {
    Family.DISCHARGING: "Battery is discharging.",
    Family.CHARGING: "Battery is charging.",
    Family.OTHER: "Battery is neither charging nor discharging.",
}

THRESHOLD_MESSAGES = {
    Zone.DISCHARGING_LOW: (Urgency.ELEVATED, "Battery is too low."),
    Zone.DISCHARGING_CRITICAL: (Urgency.URGENT, "Battery is critically low."),
    Zone.CHARGING_HIGH: (Urgency.ELEVATED, "Battery is too full."),
}


@dataclass(frozen=True)
class Alert:
    """A user-visible notification."""
    urgency: Urgency
    title: str
    body: str


def _describe(transition: Transition, message: str, reading: Optional[Reading]) -> str:
    if reading is None:
        return f"{message} ({transition.source})"
    return f"{message} ({transition.source} at {reading.percent:.0f}%)"


def alerts_for(transition: Transition, reading: Optional[Reading] = None) -> List[Alert]:
    """
    Decide which alerts a transition produces.

    A mode alert fires when the zone family changes; a threshold alert fires
    when the new zone is low, critical or high. When both apply, both are
    returned, mode alert first.

    Args:
        transition: Zone change for one source
        reading: Reading that caused the transition, used for message text

    Returns:
        Alerts to deliver, possibly empty
    """
    alerts = []

    if transition.family_changed:
        message = MODE_MESSAGES[transition.to_zone.family]
        alerts.append(Alert(Urgency.NORMAL, TITLE, _describe(transition, message, reading)))

    if transition.to_zone in THRESHOLD_MESSAGES:
        urgency, message = THRESHOLD_MESSAGES[transition.to_zone]
        title = URGENT_TITLE if urgency is Urgency.URGENT else TITLE
        alerts.append(Alert(urgency, title, _describe(transition, message, reading)))

    return alerts


class NotificationSink(ABC):
    """Delivers alerts to the user."""

    @abstractmethod
    def send(self, urgency: Urgency, title: str, body: str) -> bool:
        """
        Deliver one alert, best effort.

        Returns:
            True if the alert was delivered, False otherwise
        """
        ...


class PlyerNotificationSink(NotificationSink):
    """Desktop notifications through plyer."""

    def __init__(self):
        self._notification_module = None
        self._initialize_notification_system()

    def _initialize_notification_system(self):
        """Initialize the notification system with fallback for PyInstaller builds."""
        try:
            from plyer import notification
            self._notification_module = notification
            logger.debug("Initialized notification system using plyer")
        except (ImportError, NotImplementedError) as e:
            logger.warning(f"Failed to import plyer normally: {e}")

            # Fallback for PyInstaller builds - direct platform import
            try:
                system = platform.system().lower()
                if system == 'windows':
                    from plyer.platforms.win import notification
                elif system == 'darwin':
                    from plyer.platforms.macosx import notification
                elif system == 'linux':
                    from plyer.platforms.linux import notification
                else:
                    logger.error(f"Unsupported platform: {system}")
                    return

                self._notification_module = notification
                logger.debug(f"Initialized notification system using direct platform import for {system}")
            except (ImportError, NotImplementedError) as e:
                logger.error(f"Failed to initialize notification system: {e}")

    def send(self, urgency: Urgency, title: str, body: str) -> bool:
        if not self._notification_module:
            logger.warning("Notification system not initialized, cannot send notification")
            return False

        # Truncate title and message to platform limits
        title = title[:50]
        body = body[:200]

        try:
            # plyer has no urgency parameter; it only shows as timeout and title
            self._notification_module.notify(
                title=title,
                message=body,
                app_name=APP_NAME,
                timeout=URGENCY_TIMEOUTS[urgency],
            )
            return True

        except NotImplementedError:
            logger.error(
                "Notifications not implemented for this platform. "
                "Please install required system dependencies."
            )
            return False
        except Exception as e:
            logger.error(f"Failed to send notification: {e}", exc_info=True)
            return False


class BatteryNotifier:
    """Turns transitions into alerts and hands them to a sink."""

    def __init__(self, sink: NotificationSink, enabled: bool = True):
        """
        Initialize the battery notifier.

        Args:
            sink: Where alerts are delivered
            enabled: When False, alerts are only logged
        """
        self.sink = sink
        self.enabled = enabled

        logger.info(f"BatteryNotifier initialized (notifications {'on' if enabled else 'off'})")

    def notify(self, transition: Transition, reading: Optional[Reading] = None) -> int:
        """
        Deliver the alerts for a transition, one attempt each.

        Args:
            transition: Zone change for one source
            reading: Reading that caused the transition

        Returns:
            Number of alerts delivered
        """
        delivered = 0

        for alert in alerts_for(transition, reading):
            if not self.enabled:
                logger.info(f"Notifications disabled, skipping {alert.urgency.value} alert: {alert.body}")
                continue

            if self.sink.send(alert.urgency, alert.title, alert.body):
                delivered += 1
                logger.info(f"Sent {alert.urgency.value} notification: {alert.body}")
            else:
                logger.warning(f"Notification not delivered: {alert.body}")

        return delivered

    @classmethod
    def from_config(cls, config, sink: Optional[NotificationSink] = None) -> "BatteryNotifier":
        """
        Build a notifier from configuration.

        Args:
            config: ConfigManager instance
            sink: Sink to use, a PlyerNotificationSink if None

        Returns:
            BatteryNotifier instance
        """
        return cls(
            sink if sink is not None else PlyerNotificationSink(),
            enabled=config.get("enable_notifications", True),
        )
