"""
Battery reading sources.

Polling providers expose the power sources present on the host and refresh
one source on demand. The udev subscription delivers power supply change
events as they happen (Linux only).
"""

import logging
import select
from abc import ABC, abstractmethod
from typing import List, Mapping, Optional

import psutil

from battery_notifier.models import Mode, Reading

logger = logging.getLogger("BatteryNotifier.Sources")

POWER_SUPPLY_SUBSYSTEM = "power_supply"
BATTERY_TYPE = "Battery"
PSUTIL_SOURCE_ID = "battery"

STATUS_MODES = {
    "Charging": Mode.CHARGING,
    "Discharging": Mode.DISCHARGING,
}


class BatterySourceError(Exception):
    """Base exception for reading source errors."""
    pass


class SourceUnavailableError(BatterySourceError):
    """Reading source cannot be initialized or subscribed to."""
    pass


class ReadingError(BatterySourceError):
    """A single source could not be read this time."""
    pass


def mode_from_status(status: Optional[str]) -> Mode:
    """
    Map a kernel power supply status string to a mode.

    Args:
        status: Value of POWER_SUPPLY_STATUS (e.g. "Charging", "Full")

    Returns:
        Mode, OTHER for anything that is neither charging nor discharging
    """
    return STATUS_MODES.get((status or "").strip(), Mode.OTHER)


def reading_from_properties(source: str, properties: Mapping[str, str]) -> Reading:
    """
    Build a reading from udev power supply properties.

    Args:
        source: Power source identifier
        properties: Device properties (POWER_SUPPLY_CAPACITY, POWER_SUPPLY_STATUS)

    Returns:
        Reading for the source

    Raises:
        ReadingError: If the capacity is missing or malformed
    """
    capacity = properties.get("POWER_SUPPLY_CAPACITY")
    if capacity is None:
        raise ReadingError(f"{source} has no capacity attribute")

    try:
        percent = int(capacity)
        return Reading(
            source=source,
            percent=percent,
            mode=mode_from_status(properties.get("POWER_SUPPLY_STATUS")),
        )
    except ValueError as e:
        raise ReadingError(f"Malformed capacity for {source}: {capacity!r} ({e})") from e


def is_battery_device(device) -> bool:
    """Check whether a udev device is a battery power supply."""
    return (
        device.subsystem == POWER_SUPPLY_SUBSYSTEM
        and device.properties.get("POWER_SUPPLY_TYPE") == BATTERY_TYPE
    )


def parse_event(device) -> Optional[Reading]:
    """
    Extract a reading from a udev event.

    Args:
        device: pyudev Device delivered by the monitor

    Returns:
        Reading, or None if the event is not about a battery or cannot be parsed
    """
    try:
        if getattr(device, "action", None) == "remove":
            return None
        if not is_battery_device(device):
            return None
        return reading_from_properties(device.sys_name, device.properties)
    except (ReadingError, AttributeError, KeyError) as e:
        logger.debug(f"Ignoring unparseable power supply event: {e}")
        return None


class BatteryProvider(ABC):
    """A polling source of battery readings."""

    @abstractmethod
    def list_sources(self) -> List[str]:
        """
        List the power sources currently present.

        Returns:
            Source identifiers in a stable order
        """
        ...

    @abstractmethod
    def refresh(self, source: str) -> Reading:
        """
        Read the current state of one source.

        Raises:
            ReadingError: If the source cannot be read right now
        """
        ...


class PsutilBatteryProvider(BatteryProvider):
    """Polls the system battery through psutil (Windows, macOS, Linux)."""

    def __init__(self):
        if not hasattr(psutil, "sensors_battery"):
            raise SourceUnavailableError("psutil has no battery support on this platform")

        logger.info("Using psutil battery provider")

    def list_sources(self) -> List[str]:
        try:
            battery = psutil.sensors_battery()
        except Exception as e:
            logger.warning(f"Error querying battery: {e}")
            return []

        if battery is None:
            # No battery installed
            return []

        return [PSUTIL_SOURCE_ID]

    def refresh(self, source: str) -> Reading:
        if source != PSUTIL_SOURCE_ID:
            raise ReadingError(f"Unknown power source: {source}")

        try:
            battery = psutil.sensors_battery()
        except Exception as e:
            raise ReadingError(f"Error getting battery info: {e}") from e

        if battery is None:
            raise ReadingError("Battery disappeared")

        try:
            percent = round(float(battery.percent), 2)
        except (TypeError, ValueError) as e:
            raise ReadingError(f"Malformed battery percent: {battery.percent!r}") from e

        # psutil does not cap the energy ratio; worn batteries report above 100
        percent = min(100.0, max(0.0, percent))

        if battery.power_plugged is None:
            mode = Mode.OTHER
        elif not battery.power_plugged:
            mode = Mode.DISCHARGING
        elif percent < 100:
            mode = Mode.CHARGING
        else:
            # Plugged in and full
            mode = Mode.OTHER

        try:
            return Reading(source=source, percent=percent, mode=mode)
        except ValueError as e:
            raise ReadingError(str(e)) from e


class SysfsBatteryProvider(BatteryProvider):
    """Polls every battery under /sys/class/power_supply through pyudev (Linux)."""

    def __init__(self):
        try:
            import pyudev
            self._pyudev = pyudev
            self.context = pyudev.Context()
        except Exception as e:
            raise SourceUnavailableError(f"udev is not available: {e}") from e

        self._sys_paths = {}
        logger.info("Using sysfs battery provider")

    def list_sources(self) -> List[str]:
        self._sys_paths = {
            device.sys_name: device.sys_path
            for device in self.context.list_devices(subsystem=POWER_SUPPLY_SUBSYSTEM)
            if is_battery_device(device)
        }
        return sorted(self._sys_paths)

    def refresh(self, source: str) -> Reading:
        sys_path = self._sys_paths.get(source)
        if sys_path is None:
            raise ReadingError(f"Unknown power source: {source}")

        try:
            # Device objects cache their properties, so look the device up again
            device = self._pyudev.Devices.from_sys_path(self.context, sys_path)
        except self._pyudev.DeviceNotFoundError as e:
            raise ReadingError(f"{source} disappeared: {e}") from e

        return reading_from_properties(source, device.properties)


class UdevSubscription:
    """Subscription to power supply uevents (Linux)."""

    def __init__(self):
        try:
            import pyudev
            context = pyudev.Context()
            self.monitor = pyudev.Monitor.from_netlink(context)
            self.monitor.filter_by(subsystem=POWER_SUPPLY_SUBSYSTEM)
            self.monitor.start()
        except Exception as e:
            raise SourceUnavailableError(f"Cannot subscribe to udev events: {e}") from e

        logger.info("Subscribed to power supply events")

    def wait_for_batch(self, timeout: Optional[float] = None) -> List:
        """
        Block until device events arrive and return all that are pending.

        Args:
            timeout: Maximum seconds to wait, None to wait forever

        Returns:
            Devices in arrival order (empty if the wait timed out)

        Raises:
            ReadingError: If the wait or the first read fails; the
                subscription stays usable
        """
        try:
            ready, _, _ = select.select([self.monitor], [], [], timeout)
        except OSError as e:
            raise ReadingError(f"Error waiting for power supply events: {e}") from e

        if not ready:
            return []

        batch = []
        try:
            device = self.monitor.poll(timeout=0)
            while device is not None:
                batch.append(device)
                device = self.monitor.poll(timeout=0)
        except OSError as e:
            # ENOBUFS and friends: the kernel dropped events, later ones still arrive
            if not batch:
                raise ReadingError(f"Error reading power supply events: {e}") from e
            logger.warning(f"Error reading power supply events, keeping {len(batch)}: {e}")
        return batch
