"""
Battery polling using psutil.

Reads the charge level and charging state of the first battery the
system reports.
"""

import logging
from enum import Enum
from typing import NamedTuple, Optional

import psutil


class BatteryUnavailableError(Exception):
    """Raised when the platform offers no way to read battery status."""


class ChargeStatus(Enum):
    """Charging state reported for the battery."""
    CHARGING = "Charging"
    DISCHARGING = "Discharging"
    FULL = "Full"
    UNKNOWN = "Unknown"


class BatteryReading(NamedTuple):
    """A single battery sample."""
    charge_fraction: float
    charge_status: ChargeStatus

    @property
    def percent(self) -> float:
        return self.charge_fraction * 100.0


class BatteryPoller:
    """
    Reads battery state on demand.

    Construction fails with BatteryUnavailableError if the battery source
    cannot be used at all. After that, a missing battery or a failed read
    only makes poll() return None.
    """

    def __init__(self, config=None):
        """
        Initialize the poller and probe the battery source once.

        Args:
            config: WatcherConfig instance

        Raises:
            BatteryUnavailableError: If battery status is not supported
        """
        self.config = config
        self.logger = logging.getLogger("BatteryWatcher.Monitor")

        if not hasattr(psutil, "sensors_battery"):
            raise BatteryUnavailableError(
                "Battery status is not supported on this platform"
            )

        try:
            battery = psutil.sensors_battery()
        except Exception as e:
            raise BatteryUnavailableError(
                f"Failed to initialize battery source: {e}"
            ) from e

        if battery is None:
            self.logger.info("No battery found, waiting for one to appear")
        else:
            self.logger.info(f"Battery found at {battery.percent:.0f}%")

    def poll(self) -> Optional[BatteryReading]:
        """
        Read the current battery state.

        Returns:
            BatteryReading, or None if no battery is present or the read failed
        """
        try:
            battery = psutil.sensors_battery()
        except Exception as e:
            self.logger.debug(f"Battery read failed: {e}")
            return None

        if battery is None:
            return None

        percent = max(0.0, min(100.0, float(battery.percent)))
        return BatteryReading(
            charge_fraction=percent / 100.0,
            charge_status=self._charge_status(battery.power_plugged, percent),
        )

    @staticmethod
    def _charge_status(power_plugged: Optional[bool], percent: float) -> ChargeStatus:
        """
        Derive the charging state from psutil's plugged flag.

        Args:
            power_plugged: True/False, or None when it cannot be determined
            percent: Charge level in percent

        Returns:
            ChargeStatus for the reading
        """
        if power_plugged is None:
            return ChargeStatus.UNKNOWN
        if power_plugged:
            return ChargeStatus.FULL if percent >= 100.0 else ChargeStatus.CHARGING
        return ChargeStatus.DISCHARGING
