"""
Network Collector.

Checks reachability of the configured hosts with a single ping each and
enumerates the network adapters that are currently up.
"""

import logging
import platform
import re
import subprocess
from typing import Any, Dict, List, Optional

from ..core.models import ConnectivityResult, NetworkAdapter
from ..core.powershell import powershell_json
from ..core.results import CollectorError, CollectorResult


logger = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"^\s*(\d+(?:\.\d+)?)")

ADAPTER_QUERY = (
    "Get-NetAdapter | ForEach-Object { [PSCustomObject]@{ "
    "Name = $_.Name; "
    "InterfaceDescription = $_.InterfaceDescription; "
    "Status = [string]$_.Status; "
    "LinkSpeed = [string]$_.LinkSpeed; "
    "MacAddress = $_.MacAddress; "
    "IPv4Address = @(Get-NetIPAddress -InterfaceIndex $_.ifIndex -AddressFamily IPv4 "
    "-ErrorAction SilentlyContinue | ForEach-Object { $_.IPAddress }) } }"
)


def parse_link_speed(text: Optional[str]) -> float:
    """
    Extract the leading numeric token of a link-speed string.

    "1 Gbps" -> 1.0. The unit text is ignored; anything without a leading
    number yields 0.
    """
    if not text:
        return 0.0
    match = _LEADING_NUMBER.match(str(text))
    if not match:
        return 0.0
    return float(match.group(1))


def _as_addresses(value: Any) -> tuple:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value if v)


class NetworkCollector:
    """
    Collects network reachability and adapter state.
    """

    def __init__(
        self,
        ping_targets: Optional[List[str]] = None,
        ping_timeout_ms: int = 1000,
        powershell_timeout: float = 120,
    ):
        self.ping_targets = list(ping_targets or [])
        self.ping_timeout_ms = ping_timeout_ms
        self._powershell_timeout = powershell_timeout
        self._is_windows = platform.system() == "Windows"
        self._is_macos = platform.system() == "Darwin"

    def _ping_command(self, host: str) -> List[str]:
        if self._is_windows:
            return ["ping", "-n", "1", "-w", str(self.ping_timeout_ms), host]
        if self._is_macos:
            # macOS takes the wait time in milliseconds
            return ["ping", "-c", "1", "-W", str(self.ping_timeout_ms), host]
        timeout_sec = max(1, self.ping_timeout_ms // 1000)
        return ["ping", "-c", "1", "-W", str(timeout_sec), host]

    def ping(self, host: str) -> ConnectivityResult:
        """Send a single echo request to *host*."""
        try:
            proc = subprocess.run(
                self._ping_command(host),
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=self.ping_timeout_ms / 1000 + 1,
            )
        except subprocess.TimeoutExpired:
            # The ping itself ran; the host just did not answer in time
            return ConnectivityResult(host=host, reachable=False)
        except OSError as e:
            raise CollectorError(f"Could not run ping: {e}") from e

        return ConnectivityResult(host=host, reachable=proc.returncode == 0)

    def check_connectivity(self) -> List[CollectorResult[ConnectivityResult]]:
        """Ping every configured host independently."""
        results = []
        for host in self.ping_targets:
            try:
                result = CollectorResult.success(host, self.ping(host))
            except Exception as e:
                logger.warning(f"Connectivity check for {host} unavailable: {e}")
                result = CollectorResult.failure(host, str(e))
            results.append(result)
        return results

    def get_network_adapters(self) -> List[NetworkAdapter]:
        """Get the adapters that are up, with speed and IPv4 addresses."""
        if not self._is_windows:
            raise CollectorError("Network adapter query requires Windows")

        rows = powershell_json(ADAPTER_QUERY, timeout=self._powershell_timeout)
        return self.parse_adapters(rows)

    @staticmethod
    def parse_adapters(rows: List[Dict[str, Any]]) -> List[NetworkAdapter]:
        """Normalize raw adapter rows, keeping only adapters that are up."""
        adapters = []
        for row in rows:
            status = str(row.get("Status") or "")
            if status.lower() != "up":
                continue
            adapters.append(
                NetworkAdapter(
                    name=str(row.get("Name") or ""),
                    description=str(row.get("InterfaceDescription") or ""),
                    status=status,
                    speed_mbps=parse_link_speed(row.get("LinkSpeed")),
                    ipv4_addresses=_as_addresses(row.get("IPv4Address")),
                    mac_address=str(row.get("MacAddress") or ""),
                )
            )
        return adapters
