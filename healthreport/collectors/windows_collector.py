"""
Windows Subsystem Collector.

Collects pending update count, sound device status and the state of the
critical background services. These queries go through the Windows update
catalog, CIM and the service control manager, so they report as unavailable
on other platforms.
"""

import logging
import platform
from typing import Any, Dict, Iterable, List, Optional

import psutil

from ..core.config import CRITICAL_SERVICES
from ..core.models import AudioDevice, PendingUpdates, ServiceStatus
from ..core.powershell import powershell_json, run_powershell
from ..core.results import CollectorError
from ..core.status_codes import describe_device


logger = logging.getLogger(__name__)

UPDATE_QUERY = (
    "$session = New-Object -ComObject Microsoft.Update.Session; "
    "$searcher = $session.CreateUpdateSearcher(); "
    "$searcher.Search('IsInstalled=0').Updates.Count"
)

SOUND_DEVICE_QUERY = (
    "Get-CimInstance -ClassName Win32_SoundDevice | "
    "Select-Object Name, Description, Availability, ConfigManagerErrorCode"
)


def _label(value: Optional[str]) -> str:
    """Turn psutil's 'start_pending' style values into 'Start Pending'."""
    if not value:
        return "Unknown"
    return str(value).replace("_", " ").title()


class WindowsCollector:
    """
    Collects Windows-specific health information.
    """

    def __init__(
        self,
        services: Iterable[str] = CRITICAL_SERVICES,
        powershell_timeout: float = 120,
    ):
        self.services = tuple(services)
        self._powershell_timeout = powershell_timeout
        self._is_windows = platform.system() == "Windows"

    def _require_windows(self, what: str):
        if not self._is_windows:
            raise CollectorError(f"{what} requires Windows")

    def get_pending_updates(self) -> PendingUpdates:
        """Count updates found by the update catalog that are not installed."""
        self._require_windows("Update catalog search")
        output = run_powershell(UPDATE_QUERY, timeout=self._powershell_timeout)
        try:
            count = int(output.splitlines()[-1].strip())
        except (IndexError, ValueError) as e:
            raise CollectorError(f"Unexpected update count output: {output!r}") from e
        if count < 0:
            raise CollectorError(f"Negative update count: {count}")
        return PendingUpdates(count=count)

    def get_audio_devices(self) -> List[AudioDevice]:
        """Get sound devices with their classified status."""
        self._require_windows("Sound device query")
        rows = powershell_json(SOUND_DEVICE_QUERY, timeout=self._powershell_timeout)
        return self.parse_audio_devices(rows)

    @staticmethod
    def parse_audio_devices(rows: List[Dict[str, Any]]) -> List[AudioDevice]:
        devices = []
        for row in rows:
            status = describe_device(row.get("Availability"), row.get("ConfigManagerErrorCode"))
            devices.append(
                AudioDevice(
                    name=str(row.get("Name") or ""),
                    description=str(row.get("Description") or ""),
                    status=status.label,
                    message=status.message,
                )
            )
        return devices

    def get_services(self) -> List[ServiceStatus]:
        """
        Get the state of each allow-listed service.

        Services that are not installed on this host, or that the current
        account may not query, are skipped.
        """
        win_service_get = getattr(psutil, "win_service_get", None)
        if win_service_get is None:
            raise CollectorError("Service control manager query requires Windows")

        found = []
        for name in self.services:
            try:
                info = win_service_get(name).as_dict()
            except psutil.NoSuchProcess:
                logger.debug(f"Service {name} not present, skipping")
                continue
            except psutil.AccessDenied as e:
                logger.warning(f"Access to service {name} denied, skipping: {e}")
                continue
            except psutil.Error as e:
                raise CollectorError(f"Could not query service {name}: {e}") from e

            found.append(
                ServiceStatus(
                    name=name,
                    display_name=info.get("display_name") or name,
                    status=_label(info.get("status")),
                    start_type=_label(info.get("start_type")),
                )
            )
        return found
