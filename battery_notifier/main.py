"""
Entry point for Battery Notifier.

Wires the configured reading source, the state store and the notifier
together and runs the dispatcher until the process is terminated.
"""

import platform
import signal
import sys
import threading

from battery_notifier.config import ConfigManager
from battery_notifier.dispatcher import Dispatcher
from battery_notifier.logger import setup_logging
from battery_notifier.models import Thresholds
from battery_notifier.notifier import BatteryNotifier
from battery_notifier.sampler import EventSampler, PollingSampler, Sampler
from battery_notifier.sources import (
    PsutilBatteryProvider,
    SourceUnavailableError,
    SysfsBatteryProvider,
    UdevSubscription,
)
from battery_notifier.state import StateStore


class BatteryNotifierApp:
    """Main application class."""

    def __init__(self, config_path: str = "config.json"):
        """
        Initialize the Battery Notifier application.

        Args:
            config_path: Path to configuration file
        """
        self.config = ConfigManager(config_path)
        log_dir = self.config.get("log_dir", "data/logs")
        self.logger = setup_logging(self.config, log_dir)

        self.thresholds = Thresholds.from_config(self.config)
        self.stop_event = threading.Event()

        self.store = StateStore(self.thresholds)
        self.notifier = BatteryNotifier.from_config(self.config)
        self.dispatcher = Dispatcher(self.store, self.notifier, self.stop_event)
        self.sampler = None

        self.logger.info("=" * 60)
        self.logger.info("Battery Notifier Application Initialized")
        self.logger.info(f"Platform: {platform.system()}")
        self.logger.info(
            f"Thresholds: high={self.thresholds.high}%, low={self.thresholds.low}%, "
            f"critical={self.thresholds.critical}%"
        )
        for key, value in sorted(self.config.get_all().items()):
            self.logger.info(f"Config {key} = {value!r}")
        self.logger.info("=" * 60)

        # Setup signal handlers for graceful shutdown
        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

    def _signal_handler(self, signum, frame):
        """Handle shutdown signals gracefully."""
        self.logger.info(f"Received signal {signum}, shutting down...")
        self.dispatcher.stop()

    def create_sampler(self) -> Sampler:
        """
        Build the configured reading stream.

        Returns:
            Sampler instance

        Raises:
            SourceUnavailableError: If the reading source cannot be initialized
        """
        if self.config.get("sampler") == "events":
            self.logger.info("Sampling power supply events")
            return EventSampler(UdevSubscription(), self.stop_event)

        if self.config.get("polling_provider") == "sysfs":
            provider = SysfsBatteryProvider()
        else:
            provider = PsutilBatteryProvider()

        interval = self.config.get("polling_interval_seconds", 30)
        self.logger.info(f"Polling power sources every {interval}s")
        return PollingSampler(provider, interval, self.stop_event)

    def run(self):
        """Run the dispatcher until the process is told to stop."""
        try:
            self.sampler = self.create_sampler()
            self.dispatcher.run(self.sampler)
        except SourceUnavailableError as e:
            self.logger.critical(f"Battery source unavailable: {e}")
            raise
        finally:
            self.logger.info(f"Shutdown complete ({len(self.store)} power sources tracked)")


def main():
    """Entry point for the application."""
    try:
        app = BatteryNotifierApp()
        app.run()

    except KeyboardInterrupt:
        print("\nShutdown requested by user")

    except SourceUnavailableError as e:
        print(f"Battery source unavailable: {e}", file=sys.stderr)
        sys.exit(1)

    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        import traceback

        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
