"""Collectors module for gathering workstation health metrics."""

from .local_collector import LocalCollector
from .network_collector import NetworkCollector, parse_link_speed
from .windows_collector import WindowsCollector
from .health_collector import HealthCollector

__all__ = [
    "LocalCollector",
    "NetworkCollector",
    "WindowsCollector",
    "HealthCollector",
    "parse_link_speed",
]
