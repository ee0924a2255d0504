"""Local Notifications Manager - schedule, list and cancel on-device notifications."""

__version__ = "0.1.0"
