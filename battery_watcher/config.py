"""
Configuration for Battery Watcher.

All settings are fixed defaults. Only the logging settings can be
overridden, from the command line.
"""

import threading
from typing import Any, Dict, Optional

# Icon files shown with each notification category
ICON_PATHS = {
    "critical": "/usr/share/icons/critical.svg",
    "low": "/usr/share/icons/low-battery.svg",
    "full": "/usr/share/icons/full-battery.svg",
    "charging": "/usr/share/icons/charging.svg",
    "discharging": "/usr/share/icons/unplugged.svg",
}


class WatcherConfig:
    """Thread-safe, read-only view of the watcher settings."""

    DEFAULT_CONFIG = {
        "poll_interval_seconds": 1,
        "low_battery_percent": 25.0,
        "critical_battery_percent": 10.0,
        "full_battery_percent": 100.0,
        "notification_timeout_seconds": 5,
        "notification_transient": True,
        "app_name": "Battery Watcher",
        "log_level": "INFO",
        "log_file": None,
    }

    OVERRIDABLE_KEYS = ("log_level", "log_file")

    VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    def __init__(self, overrides: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration.

        Args:
            overrides: Values replacing the defaults for the logging keys

        Raises:
            ValueError: If an override names a key that cannot be changed
        """
        self.lock = threading.Lock()
        config = self.DEFAULT_CONFIG.copy()

        for key, value in (overrides or {}).items():
            if key not in self.OVERRIDABLE_KEYS:
                raise ValueError(f"Setting '{key}' cannot be overridden")
            config[key] = value

        self.config = self._validate_config(config)

    def _validate_config(self, config: Dict) -> Dict:
        """
        Validate and sanitize configuration values.

        Args:
            config: Configuration dictionary to validate

        Returns:
            Validated configuration dictionary
        """
        log_level = config.get("log_level")
        if isinstance(log_level, str):
            log_level = log_level.upper()
        if log_level not in self.VALID_LOG_LEVELS:
            log_level = "INFO"
        config["log_level"] = log_level

        if config.get("log_file") == "":
            config["log_file"] = None

        return config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        with self.lock:
            return self.config.get(key, default)

    def get_all(self) -> Dict:
        """Return a copy of all configuration values."""
        with self.lock:
            return self.config.copy()
