"""
Local Performance Collector.

Collects identity, CPU, memory and disk usage from the local machine
using psutil and the platform module.
"""

import logging
import platform
import subprocess
from typing import List

import psutil

from ..core.config import CPU_SAMPLE_SECONDS
from ..core.models import (
    SystemInfo,
    CpuUsage,
    MemoryUsage,
    DiskUsageEntry,
)
from ..core.powershell import powershell_json, run_powershell
from ..core.results import CollectorError


logger = logging.getLogger(__name__)


class LocalCollector:
    """
    Collects performance metrics from the local machine.

    Every ``get_*`` method returns a fully-populated record or raises
    CollectorError.
    """

    def __init__(self, hostname: str, powershell_timeout: float = 120):
        self._hostname = hostname
        self._powershell_timeout = powershell_timeout

    def get_system_info(self) -> SystemInfo:
        """Get operating system and processor identity."""
        try:
            uname = platform.uname()
        except Exception as e:
            raise CollectorError(f"Could not query operating system: {e}") from e

        if uname.system == "Windows":
            os_name, os_version = self._get_windows_os()
        else:
            os_name = f"{uname.system} {uname.release}".strip()
            os_version = uname.version or uname.release
        if not os_name:
            raise CollectorError("Operating system name is not available")

        return SystemInfo(
            os_name=os_name,
            os_version=os_version,
            processor=self._get_cpu_model(uname.system) or uname.processor or uname.machine,
            computer_name=uname.node or self._hostname,
        )

    def _get_windows_os(self):
        """Get the product name and build from Win32_OperatingSystem."""
        rows = powershell_json(
            "Get-CimInstance -ClassName Win32_OperatingSystem | Select-Object Caption, Version",
            timeout=self._powershell_timeout,
        )
        if not rows:
            raise CollectorError("Win32_OperatingSystem returned no instance")
        os_info = rows[0]
        return str(os_info.get("Caption") or "").strip(), str(os_info.get("Version") or "").strip()

    def _get_cpu_model(self, system: str) -> str:
        """Get CPU model name."""
        try:
            if system == "Darwin":
                result = subprocess.run(
                    ["sysctl", "-n", "machdep.cpu.brand_string"],
                    capture_output=True,
                    text=True,
                    timeout=10,
                )
                return result.stdout.strip()
            elif system == "Linux":
                with open("/proc/cpuinfo", "r") as f:
                    for line in f:
                        if "model name" in line:
                            return line.split(":", 1)[1].strip()
            elif system == "Windows":
                output = run_powershell(
                    "(Get-CimInstance -ClassName Win32_Processor | Select-Object -First 1).Name",
                    timeout=self._powershell_timeout,
                )
                return output.strip()
        except (OSError, subprocess.SubprocessError, CollectorError) as e:
            logger.debug(f"Could not read CPU model: {e}")
        return platform.processor()

    def get_cpu_usage(self) -> CpuUsage:
        """Sample processor utilization over the fixed one-second window."""
        try:
            percent = psutil.cpu_percent(interval=CPU_SAMPLE_SECONDS)
        except Exception as e:
            raise CollectorError(f"Could not sample processor counter: {e}") from e

        return CpuUsage(usage_percent=round(float(percent), 2), sample_seconds=CPU_SAMPLE_SECONDS)

    def get_memory_usage(self) -> MemoryUsage:
        """Get physical memory usage."""
        try:
            mem = psutil.virtual_memory()
        except Exception as e:
            raise CollectorError(f"Could not query memory: {e}") from e

        return MemoryUsage.from_bytes(mem.total, mem.available)

    def get_disk_usage(self) -> List[DiskUsageEntry]:
        """Get usage for every mounted volume whose used and free space are known."""
        try:
            partitions = psutil.disk_partitions(all=False)
        except Exception as e:
            raise CollectorError(f"Could not enumerate volumes: {e}") from e

        entries = []
        for partition in partitions:
            try:
                usage = psutil.disk_usage(partition.mountpoint)
            except (PermissionError, OSError) as e:
                # Empty card readers and locked volumes have no known size
                logger.debug(f"Could not access {partition.mountpoint}: {e}")
                continue

            if usage.used is None or usage.free is None:
                continue

            entries.append(
                DiskUsageEntry.from_space(partition.mountpoint, usage.used, usage.free)
            )

        return entries
