"""
Battery Notifier - Battery Charge Alerts

A background service that watches the charge state of the host's batteries
and sends desktop notifications when a battery starts charging or
discharging, runs low, runs critically low, or is nearly full.
"""

__version__ = "1.0.0"
__author__ = "Battery Notifier Team"
