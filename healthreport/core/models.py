"""
Data models for workstation health snapshots.

These frozen dataclasses are the normalized records produced by the
collectors. They are built once per run and discarded after rendering.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Tuple

from .results import CollectorError, CollectorResult


BYTES_PER_GB = 1024 ** 3


@dataclass(frozen=True)
class SystemInfo:
    """Basic machine identification information."""

    os_name: str
    os_version: str
    processor: str
    computer_name: str


@dataclass(frozen=True)
class CpuUsage:
    """Processor utilization sampled over a fixed window."""

    usage_percent: float
    sample_seconds: float = 1.0


@dataclass(frozen=True)
class MemoryUsage:
    """Physical memory usage in gigabytes."""

    total_gb: float
    used_gb: float
    free_gb: float
    usage_percent: float

    @classmethod
    def from_bytes(cls, total_bytes: int, free_bytes: int) -> "MemoryUsage":
        """
        Build a record from raw byte counts.

        The percentage is computed from the rounded gigabyte figures so the
        record is self-consistent: usage_percent == round((total-free)/total*100, 2).
        """
        total_gb = round(total_bytes / BYTES_PER_GB, 2)
        free_gb = round(free_bytes / BYTES_PER_GB, 2)
        if total_gb <= 0:
            raise CollectorError("operating system reported zero total memory")
        free_gb = min(max(free_gb, 0.0), total_gb)
        used_gb = round(total_gb - free_gb, 2)
        usage_percent = round((total_gb - free_gb) / total_gb * 100, 2)
        return cls(
            total_gb=total_gb,
            used_gb=used_gb,
            free_gb=free_gb,
            usage_percent=usage_percent,
        )


@dataclass(frozen=True)
class DiskUsageEntry:
    """Usage of one mounted filesystem volume."""

    drive: str
    usage_percent: float

    @classmethod
    def from_space(cls, drive: str, used_bytes: int, free_bytes: int) -> "DiskUsageEntry":
        total = used_bytes + free_bytes
        if total == 0:
            return cls(drive=drive, usage_percent=0.0)
        return cls(drive=drive, usage_percent=round(used_bytes / total * 100, 2))


@dataclass(frozen=True)
class ConnectivityResult:
    """Outcome of one reachability check."""

    host: str
    reachable: bool


@dataclass(frozen=True)
class AudioDevice:
    """Sound device with its classified status."""

    name: str
    description: str
    status: str
    message: str

    @property
    def is_ok(self) -> bool:
        return self.status == "OK"


@dataclass(frozen=True)
class NetworkAdapter:
    """An adapter in the "up" state."""

    name: str
    description: str
    status: str
    speed_mbps: float
    ipv4_addresses: Tuple[str, ...] = ()
    mac_address: str = ""


@dataclass(frozen=True)
class ServiceStatus:
    """State of one allow-listed background service."""

    name: str
    display_name: str
    status: str
    start_type: str

    @property
    def is_running(self) -> bool:
        return self.status == "Running"


@dataclass(frozen=True)
class PendingUpdates:
    """Number of updates found but not yet installed."""

    count: int

    @property
    def up_to_date(self) -> bool:
        return self.count == 0


@dataclass(frozen=True)
class HealthSnapshot:
    """Complete health snapshot of the local machine at a point in time."""

    hostname: str
    timestamp: datetime
    system_info: CollectorResult[SystemInfo]
    cpu: CollectorResult[CpuUsage]
    memory: CollectorResult[MemoryUsage]
    disks: CollectorResult[List[DiskUsageEntry]]
    connectivity: List[CollectorResult[ConnectivityResult]]
    updates: CollectorResult[PendingUpdates]
    audio_devices: CollectorResult[List[AudioDevice]]
    network_adapters: CollectorResult[List[NetworkAdapter]]
    services: CollectorResult[List[ServiceStatus]]
    collection_duration_ms: float = 0.0

    def results(self) -> List[CollectorResult]:
        """All collector results, connectivity checks included."""
        singles = [
            self.system_info,
            self.cpu,
            self.memory,
            self.disks,
            self.updates,
            self.audio_devices,
            self.network_adapters,
            self.services,
        ]
        return singles + list(self.connectivity)

    @property
    def errors(self) -> List[str]:
        """Human-readable list of failed collectors."""
        return [str(r) for r in self.results() if not r.ok]

    def to_dict(self) -> dict:
        """Convert snapshot to dictionary for serialization."""

        def unwrap(result: CollectorResult, convert):
            if not result.ok:
                return None
            return convert(result.value)

        def as_list(items):
            return [vars(item).copy() for item in items]

        return {
            "hostname": self.hostname,
            "timestamp": self.timestamp.isoformat(),
            "system": unwrap(self.system_info, lambda v: vars(v).copy()),
            "cpu": unwrap(self.cpu, lambda v: {"usage_percent": v.usage_percent}),
            "memory": unwrap(self.memory, lambda v: vars(v).copy()),
            "disks": unwrap(self.disks, as_list),
            "connectivity": [
                {
                    "host": r.value.host if r.ok else r.source,
                    "reachable": r.value.reachable if r.ok else None,
                }
                for r in self.connectivity
            ],
            "pending_updates": unwrap(self.updates, lambda v: v.count),
            "audio_devices": unwrap(self.audio_devices, as_list),
            "network_adapters": unwrap(
                self.network_adapters,
                lambda items: [
                    dict(vars(a), ipv4_addresses=list(a.ipv4_addresses)) for a in items
                ],
            ),
            "services": unwrap(self.services, as_list),
            "collection_duration_ms": self.collection_duration_ms,
            "errors": self.errors,
        }
