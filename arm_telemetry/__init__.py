"""Telemetry simulator and analyzer for a 6-axis robotic arm."""

__version__ = "0.1.0"
