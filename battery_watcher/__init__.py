"""
Battery Watcher - Desktop Battery Status Notifier

Polls the battery once a second and sends a desktop notification when the
charger is connected or disconnected, or the charge crosses the low,
critical or full thresholds.
"""

__version__ = "1.0.0"
__author__ = "Battery Watcher Team"
