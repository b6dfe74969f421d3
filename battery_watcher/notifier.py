"""
Change detection and desktop notifications for battery events.
"""

import logging
from enum import Enum
from typing import List, NamedTuple, Optional

from battery_watcher.config import ICON_PATHS, WatcherConfig
from battery_watcher.monitor import BatteryReading, ChargeStatus

logger = logging.getLogger("BatteryWatcher.Notifier")

LOW_BATTERY_PERCENT = WatcherConfig.DEFAULT_CONFIG["low_battery_percent"]
CRITICAL_BATTERY_PERCENT = WatcherConfig.DEFAULT_CONFIG["critical_battery_percent"]
FULL_BATTERY_PERCENT = WatcherConfig.DEFAULT_CONFIG["full_battery_percent"]


class CapacityTier(Enum):
    """Charge level buckets that trigger notifications."""
    FULL = "full"
    CRITICAL = "critical"
    LOW = "low"
    NORMAL = "normal"


class IconKind(Enum):
    """Icon shown with a notification."""
    CRITICAL = "critical"
    LOW = "low"
    FULL = "full"
    CHARGING = "charging"
    DISCHARGING = "discharging"

    @property
    def path(self) -> str:
        return ICON_PATHS[self.value]


class Notification(NamedTuple):
    title: str
    body: str
    icon: IconKind


class TrackedState:
    """Last charge status and capacity tier seen. Empty string means never seen."""

    def __init__(self):
        self.last_charge_status = ""
        self.last_capacity_tier = ""


def capacity_tier(percent: float) -> CapacityTier:
    """
    Bucket a charge percentage.

    Full is checked first, so 100% is always full.

    Args:
        percent: Charge level in percent

    Returns:
        CapacityTier for the level
    """
    if percent >= FULL_BATTERY_PERCENT:
        return CapacityTier.FULL
    if percent <= CRITICAL_BATTERY_PERCENT:
        return CapacityTier.CRITICAL
    if percent <= LOW_BATTERY_PERCENT:
        return CapacityTier.LOW
    return CapacityTier.NORMAL


def _status_notification(status: ChargeStatus, percent: float) -> Optional[Notification]:
    if status is ChargeStatus.CHARGING:
        return Notification(
            "Charger Connected", f"Charging ({percent:.0f}%).", IconKind.CHARGING
        )
    if status is ChargeStatus.DISCHARGING:
        return Notification(
            "Charger Disconnected", f"Battery ({percent:.0f}%).", IconKind.DISCHARGING
        )
    if status is ChargeStatus.FULL:
        return Notification(
            "Battery Full", "Battery is fully charged.", IconKind.FULL
        )
    return None


def _tier_notification(
    tier: CapacityTier, percent: float, status: ChargeStatus
) -> Optional[Notification]:
    if tier is CapacityTier.CRITICAL:
        return Notification(
            "Critical Battery",
            f"Battery level is at {percent:.0f}%. Plug in immediately!",
            IconKind.CRITICAL,
        )
    if tier is CapacityTier.LOW:
        return Notification(
            "Low Battery",
            f"Battery level is at {percent:.0f}%. Consider plugging in soon.",
            IconKind.LOW,
        )
    # A Full charge status already announces the full battery
    if tier is CapacityTier.FULL and status is not ChargeStatus.FULL:
        return Notification(
            "Battery Full", f"Battery is at {percent:.0f}%.", IconKind.FULL
        )
    return None


def evaluate(reading: BatteryReading, state: TrackedState) -> List[Notification]:
    """
    Compare a reading with the last one seen and build the notifications due.

    A charge status change and a tier change are handled independently, so
    both can produce a notification for the same reading. The state is
    updated in place.

    Args:
        reading: Current battery reading
        state: Tracked state from previous readings

    Returns:
        Notifications to send, possibly empty
    """
    notifications = []
    percent = reading.percent
    status = reading.charge_status

    if status.value != state.last_charge_status:
        notification = _status_notification(status, percent)
        if notification:
            notifications.append(notification)
        state.last_charge_status = status.value

    tier = capacity_tier(percent)
    if tier.value != state.last_capacity_tier:
        notification = _tier_notification(tier, percent, status)
        if notification:
            notifications.append(notification)
        state.last_capacity_tier = tier.value

    return notifications


class NotificationDispatcher:
    """
    Sends desktop notifications through plyer.

    Delivery is best-effort: failures are dropped and never reach the caller.
    """

    def __init__(self, config):
        """
        Initialize the dispatcher.

        Args:
            config: WatcherConfig instance
        """
        self.config = config
        self._notification_module = None
        self._initialize_notification_system()

    def _initialize_notification_system(self):
        """Load plyer's notification facade."""
        try:
            from plyer import notification
            self._notification_module = notification
            logger.debug("Initialized notification system using plyer")
        except (ImportError, NotImplementedError) as e:
            logger.warning(f"Desktop notifications unavailable: {e}")

    def dispatch(self, title: str, body: str, icon: IconKind) -> None:
        """
        Show a transient desktop notification. Never raises.

        Args:
            title: Notification title
            body: Notification message
            icon: Icon to show with it
        """
        if not self._notification_module:
            return

        try:
            self._notification_module.notify(
                title=title,
                message=body,
                app_name=self.config.get("app_name", "Battery Watcher"),
                app_icon=icon.path,
                timeout=self.config.get("notification_timeout_seconds", 5),
                hints={"transient": self.config.get("notification_transient", True)},
            )
            logger.info(f"Sent notification: {title}")
        except Exception as e:
            logger.debug(f"Notification '{title}' not delivered: {e}")

    def send(self, notification: Notification) -> None:
        self.dispatch(notification.title, notification.body, notification.icon)
