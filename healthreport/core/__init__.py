"""Core module containing data models, result wrappers and configuration."""

from .models import (
    SystemInfo,
    CpuUsage,
    MemoryUsage,
    DiskUsageEntry,
    ConnectivityResult,
    AudioDevice,
    NetworkAdapter,
    ServiceStatus,
    PendingUpdates,
    HealthSnapshot,
)
from .results import CollectorError, CollectorResult
from .config import Config

__all__ = [
    "SystemInfo",
    "CpuUsage",
    "MemoryUsage",
    "DiskUsageEntry",
    "ConnectivityResult",
    "AudioDevice",
    "NetworkAdapter",
    "ServiceStatus",
    "PendingUpdates",
    "HealthSnapshot",
    "CollectorError",
    "CollectorResult",
    "Config",
]
