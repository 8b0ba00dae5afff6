"""Shared fixtures for the health report tests."""

from datetime import datetime

import pytest

from healthreport.core.models import (
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
from healthreport.core.results import CollectorResult


TIMESTAMP = datetime(2026, 10, 18, 9, 30, 0)


def build_snapshot(**overrides) -> HealthSnapshot:
    """A fully-populated snapshot; pass results as keyword overrides."""
    fields = dict(
        hostname="WS-042",
        timestamp=TIMESTAMP,
        system_info=CollectorResult.success(
            "System information",
            SystemInfo(
                os_name="Windows 10",
                os_version="10.0.19045",
                processor="Intel(R) Core(TM) i7-8700 CPU @ 3.20GHz",
                computer_name="WS-042",
            ),
        ),
        cpu=CollectorResult.success("CPU usage", CpuUsage(usage_percent=12.5)),
        memory=CollectorResult.success(
            "Memory usage", MemoryUsage.from_bytes(16 * 1024 ** 3, 4 * 1024 ** 3)
        ),
        disks=CollectorResult.success(
            "Disk usage",
            [DiskUsageEntry("C:\\", 61.37), DiskUsageEntry("D:\\", 0.0)],
        ),
        connectivity=[
            CollectorResult.success("8.8.8.8", ConnectivityResult("8.8.8.8", True)),
            CollectorResult.success("google.com", ConnectivityResult("google.com", True)),
        ],
        updates=CollectorResult.success("Pending updates", PendingUpdates(count=0)),
        audio_devices=CollectorResult.success(
            "Audio devices",
            [
                AudioDevice(
                    "Realtek High Definition Audio",
                    "Realtek High Definition Audio",
                    "OK",
                    "The device is running at full power. This device is working properly.",
                )
            ],
        ),
        network_adapters=CollectorResult.success(
            "Network adapters",
            [
                NetworkAdapter(
                    name="Ethernet",
                    description="Intel(R) Ethernet Connection I219-V",
                    status="Up",
                    speed_mbps=1.0,
                    ipv4_addresses=("192.168.1.20",),
                    mac_address="00-1A-2B-3C-4D-5E",
                )
            ],
        ),
        services=CollectorResult.success(
            "Critical services",
            [
                ServiceStatus("wuauserv", "Windows Update", "Running", "Manual"),
                ServiceStatus("Audiosrv", "Windows Audio", "Stopped", "Automatic"),
            ],
        ),
        collection_duration_ms=1234.5,
    )
    fields.update(overrides)
    return HealthSnapshot(**fields)


@pytest.fixture
def snapshot() -> HealthSnapshot:
    return build_snapshot()
