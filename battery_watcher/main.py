"""
Battery Watcher - Main Application

Runs the polling loop until interrupted and forwards battery events to
the desktop notification service.
"""

import argparse
import logging
import signal
import sys
import threading
from enum import Enum
from typing import Optional

from battery_watcher.config import WatcherConfig
from battery_watcher.logger import setup_logging
from battery_watcher.monitor import BatteryPoller
from battery_watcher.notifier import NotificationDispatcher, TrackedState, evaluate


class WatcherState(Enum):
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"


class BatteryWatcherApp:
    """Main application: poll, compare, notify, sleep."""

    def __init__(
        self,
        config: Optional[WatcherConfig] = None,
        poller: Optional[BatteryPoller] = None,
        dispatcher: Optional[NotificationDispatcher] = None,
    ):
        """
        Initialize the Battery Watcher application.

        Args:
            config: WatcherConfig instance, defaults when omitted
            poller: Battery poller, created from config when omitted
            dispatcher: Notification dispatcher, created from config when omitted

        Raises:
            BatteryUnavailableError: If the battery source cannot be initialized
        """
        self.config = config or WatcherConfig()
        self.logger = logging.getLogger("BatteryWatcher.App")

        self.poller = poller or BatteryPoller(self.config)
        self.dispatcher = dispatcher or NotificationDispatcher(self.config)

        # Set by the signal handler, checked at the top of every iteration
        self.shutdown_event = threading.Event()
        self.state = WatcherState.RUNNING
        self.tracked = TrackedState()

        self._previous_handlers = {}

    def _signal_handler(self, signum, frame):
        """Request a graceful shutdown."""
        print("Received Ctrl+C, exiting gracefully...")
        self.logger.info(f"Received signal {signum}, shutting down...")
        self.shutdown_event.set()

    def _install_signal_handlers(self):
        for signum in (signal.SIGINT, signal.SIGTERM):
            self._previous_handlers[signum] = signal.signal(signum, self._signal_handler)

    def _restore_signal_handlers(self):
        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, handler)
        self._previous_handlers.clear()

    def run_once(self):
        """Poll the battery and send any notifications the reading calls for."""
        reading = self.poller.poll()
        if reading is None:
            return

        for notification in evaluate(reading, self.tracked):
            self.dispatcher.send(notification)

    def run(self):
        """Run the polling loop until shutdown is requested."""
        interval = self.config.get("poll_interval_seconds", 1)
        self._install_signal_handlers()
        self.logger.info("Battery watcher started")

        try:
            while self.state is WatcherState.RUNNING:
                if self.shutdown_event.is_set():
                    self.state = WatcherState.STOPPING
                    break

                self.run_once()

                # Wakes immediately once shutdown is requested
                self.shutdown_event.wait(timeout=interval)
        finally:
            self._restore_signal_handlers()

        self.state = WatcherState.STOPPED
        self.logger.info("Battery watcher stopped")
        print("Exiting program. Goodbye!")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="battery-watcher",
        description="Send desktop notifications when the battery state changes",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", help="Also write logs to this file")
    return parser.parse_args(argv)


def main(argv=None):
    """Entry point for the application."""
    args = parse_args(argv)

    overrides = {"log_file": args.log_file}
    if args.debug:
        overrides["log_level"] = "DEBUG"

    try:
        config = WatcherConfig(overrides)
        setup_logging(config)

        app = BatteryWatcherApp(config)
        app.run()

    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
