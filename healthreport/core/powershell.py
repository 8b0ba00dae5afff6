"""
PowerShell query runner.

Thin wrapper around powershell.exe used for the Windows instrumentation
queries (CIM classes, the update catalog, network adapters). Failures are
raised as CollectorError so the calling collector can be reported as
unavailable.
"""

import json
import logging
import subprocess
from typing import Any, Dict, List

from .results import CollectorError


logger = logging.getLogger(__name__)

POWERSHELL = "powershell"


def run_powershell(command: str, timeout: float = 120) -> str:
    """Run a PowerShell command and return its stripped stdout."""
    script = (
        "[Console]::OutputEncoding = [Text.Encoding]::UTF8; "
        f"$ErrorActionPreference = 'Stop'; {command}"
    )
    logger.debug(f"Running PowerShell: {command}")
    try:
        result = subprocess.run(
            [POWERSHELL, "-NoProfile", "-NonInteractive", "-Command", script],
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise CollectorError("PowerShell is not available on this host") from e
    except subprocess.TimeoutExpired as e:
        raise CollectorError(f"PowerShell query timed out after {timeout}s") from e

    if result.returncode != 0:
        detail = (result.stderr or "").strip().splitlines()
        reason = detail[0] if detail else "no error output"
        raise CollectorError(f"PowerShell exited with code {result.returncode}: {reason}")

    return (result.stdout or "").strip()


def powershell_json(command: str, timeout: float = 120) -> List[Dict[str, Any]]:
    """Run a PowerShell pipeline and parse its output as a list of objects."""
    raw = run_powershell(f"{command} | ConvertTo-Json -Compress -Depth 3", timeout=timeout)
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CollectorError(f"Unparseable PowerShell output: {e}") from e

    # ConvertTo-Json emits a bare object for single results
    if isinstance(data, dict):
        return [data]
    if not isinstance(data, list):
        raise CollectorError(f"Unexpected PowerShell output type: {type(data).__name__}")
    return [item for item in data if isinstance(item, dict)]
