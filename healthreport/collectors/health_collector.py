"""
Health Collector.

Runs every collector in sequence and assembles a HealthSnapshot. Each
collector is isolated: a failure is logged as a warning and recorded as a
failed CollectorResult while the remaining collectors still run.
"""

import logging
import time
from datetime import datetime
from typing import Callable, Optional, TypeVar

from ..core.config import Config
from ..core.models import HealthSnapshot
from ..core.results import CollectorResult
from .local_collector import LocalCollector
from .network_collector import NetworkCollector
from .windows_collector import WindowsCollector


logger = logging.getLogger(__name__)

T = TypeVar("T")


def guarded(source: str, collect: Callable[[], T]) -> CollectorResult[T]:
    """Run one collector, converting any failure into an error result."""
    try:
        return CollectorResult.success(source, collect())
    except Exception as e:
        logger.warning(f"{source} unavailable: {e}")
        return CollectorResult.failure(source, str(e))


class HealthCollector:
    """
    Collects the complete health snapshot of the local machine.
    """

    def __init__(
        self,
        config: Config,
        hostname: str,
        local: Optional[LocalCollector] = None,
        network: Optional[NetworkCollector] = None,
        windows: Optional[WindowsCollector] = None,
    ):
        timeout = config.collection.powershell_timeout_seconds
        self.hostname = hostname
        self.local = local or LocalCollector(hostname, powershell_timeout=timeout)
        self.network = network or NetworkCollector(
            ping_targets=config.collection.ping_targets,
            ping_timeout_ms=config.collection.ping_timeout_ms,
            powershell_timeout=timeout,
        )
        self.windows = windows or WindowsCollector(powershell_timeout=timeout)

    def collect_all(self, timestamp: datetime) -> HealthSnapshot:
        """Collect all metrics and return a complete snapshot."""
        start_time = time.time()

        system_info = guarded("System information", self.local.get_system_info)
        cpu = guarded("CPU usage", self.local.get_cpu_usage)
        memory = guarded("Memory usage", self.local.get_memory_usage)
        disks = guarded("Disk usage", self.local.get_disk_usage)
        connectivity = self.network.check_connectivity()
        updates = guarded("Pending updates", self.windows.get_pending_updates)
        audio_devices = guarded("Audio devices", self.windows.get_audio_devices)
        network_adapters = guarded("Network adapters", self.network.get_network_adapters)
        services = guarded("Critical services", self.windows.get_services)

        duration_ms = (time.time() - start_time) * 1000
        logger.info(f"Collection finished in {duration_ms:.0f} ms")

        return HealthSnapshot(
            hostname=self.hostname,
            timestamp=timestamp,
            system_info=system_info,
            cpu=cpu,
            memory=memory,
            disks=disks,
            connectivity=connectivity,
            updates=updates,
            audio_devices=audio_devices,
            network_adapters=network_adapters,
            services=services,
            collection_duration_ms=duration_ms,
        )
