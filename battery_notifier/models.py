"""
Value types shared by the battery notifier components.

Readings, zones and transitions are immutable; the only mutable state in the
application lives in the StateStore.
"""

from dataclasses import dataclass
from enum import Enum


class Mode(Enum):
    """Charging status reported for a power source."""
    CHARGING = "charging"
    DISCHARGING = "discharging"
    OTHER = "other"


class Family(Enum):
    """Coarse grouping of a zone, ignoring severity."""
    CHARGING = "charging"
    DISCHARGING = "discharging"
    OTHER = "other"


class Zone(Enum):
    """Classified state of a power source."""
    DISCHARGING_NORMAL = "discharging.normal"
    DISCHARGING_LOW = "discharging.low"
    DISCHARGING_CRITICAL = "discharging.critical"
    CHARGING_NORMAL = "charging.normal"
    CHARGING_HIGH = "charging.high"
    OTHER = "other"

    @property
    def family(self) -> Family:
        return Family(self.value.split(".")[0])


@dataclass(frozen=True)
class Reading:
    """A single sample of one power source."""
    source: str
    percent: float
    mode: Mode

    def __post_init__(self):
        if not 0 <= self.percent <= 100:
            raise ValueError(f"percent out of range for {self.source}: {self.percent}")


@dataclass(frozen=True)
class Transition:
    """A change of zone for one power source."""
    source: str
    from_zone: Zone
    to_zone: Zone

    def __post_init__(self):
        if self.from_zone == self.to_zone:
            raise ValueError(f"Transition for {self.source} does not change zone")

    @property
    def family_changed(self) -> bool:
        return self.from_zone.family != self.to_zone.family


@dataclass(frozen=True)
class Thresholds:
    """Charge percentages that separate the zones."""
    high: float = 80
    low: float = 30
    critical: float = 10

    def __post_init__(self):
        if not 0 <= self.critical < self.low < self.high <= 100:
            raise ValueError(
                f"Invalid thresholds: critical={self.critical}, low={self.low}, high={self.high}"
            )

    @classmethod
    def from_config(cls, config) -> "Thresholds":
        """
        Build thresholds from configuration.

        Args:
            config: ConfigManager instance

        Returns:
            Thresholds instance
        """
        return cls(
            high=config.get("high_threshold_percent", 80),
            low=config.get("low_threshold_percent", 30),
            critical=config.get("critical_threshold_percent", 10),
        )


DEFAULT_THRESHOLDS = Thresholds()
